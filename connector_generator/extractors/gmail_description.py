"""Built-in n8n-style description of the Gmail node."""
from connector_generator.extractors.n8n_schema_extractor import NodeDescription, ResourceDescription


def _show(resource: str, *operations: str) -> dict:
    return {"show": {"resource": [resource], "operation": list(operations)}}


MESSAGE_OPERATIONS = [
    {"name": "Add Label", "value": "addLabels", "action": "Add label to message"},
    {"name": "Delete", "value": "delete", "action": "Delete a message"},
    {"name": "Get", "value": "get", "action": "Get a message"},
    {"name": "Get Many", "value": "getAll", "action": "Get many messages"},
    {"name": "Mark as Read", "value": "markAsRead", "action": "Mark a message as read"},
    {"name": "Remove Label", "value": "removeLabels", "action": "Remove label from message"},
    {"name": "Reply", "value": "reply", "action": "Reply to a message"},
    {"name": "Send", "value": "send", "action": "Send a message"},
]

MESSAGE_FIELDS = [
    {
        "displayName": "Message ID",
        "name": "messageId",
        "type": "string",
        "default": "",
        "required": True,
        "placeholder": "172ce2c4a72cc243",
        "displayOptions": _show(
            "message", "get", "delete", "markAsRead", "addLabels", "removeLabels", "reply"
        ),
    },
    {
        "displayName": "To",
        "name": "sendTo",
        "type": "string",
        "default": "",
        "required": True,
        "placeholder": "info@example.com",
        "description": "The email addresses of the recipients. Multiple addresses can be separated by a comma.",
        "displayOptions": _show("message", "send"),
    },
    {
        "displayName": "Subject",
        "name": "subject",
        "type": "string",
        "default": "",
        "required": True,
        "placeholder": "Hello World!",
        "displayOptions": _show("message", "send"),
    },
    {
        "displayName": "Email Type",
        "name": "emailType",
        "type": "options",
        "default": "html",
        "required": True,
        "options": [
            {"name": "HTML", "value": "html"},
            {"name": "Text", "value": "text"},
        ],
        "displayOptions": _show("message", "send", "reply"),
    },
    {
        "displayName": "Message",
        "name": "message",
        "type": "string",
        "default": "",
        "required": True,
        "displayOptions": _show("message", "send", "reply"),
    },
    {
        "displayName": "Options",
        "name": "options",
        "type": "collection",
        "default": {},
        "placeholder": "Add option",
        "options": [
            {"displayName": "Reply to Sender Only", "name": "replyToSenderOnly", "type": "boolean"},
        ],
        "displayOptions": _show("message", "reply"),
    },
    {
        "displayName": "Label Names or IDs",
        "name": "labelIds",
        "type": "multiOptions",
        "default": [],
        "required": True,
        "typeOptions": {"loadOptionsMethod": "getLabels"},
        "description": "Choose from the list, or specify IDs using an expression",
        "displayOptions": _show("message", "addLabels", "removeLabels"),
    },
    {
        "displayName": "Simplify",
        "name": "simple",
        "type": "boolean",
        "default": True,
        "description": "Whether to return a simplified version of the response instead of the raw data",
        "displayOptions": _show("message", "get", "getAll"),
    },
    {
        "displayName": "Return All",
        "name": "returnAll",
        "type": "boolean",
        "default": False,
        "description": "Whether to return all results or only up to a given limit",
        "displayOptions": _show("message", "getAll"),
    },
    {
        "displayName": "Limit",
        "name": "limit",
        "type": "number",
        "default": 50,
        "description": "Max number of results to return",
        "displayOptions": _show("message", "getAll"),
    },
    # Legacy definition kept by n8n for older workflow versions
    {
        "displayName": "Message ID",
        "name": "messageId",
        "type": "string",
        "default": "",
        "required": True,
        "description": "The ID of the message you are replying to",
        "displayOptions": _show("message", "reply"),
    },
]

LABEL_OPERATIONS = [
    {"name": "Create", "value": "create", "action": "Create a label"},
    {"name": "Delete", "value": "delete", "action": "Delete a label"},
    {"name": "Get", "value": "get", "action": "Get a label info"},
    {"name": "Get Many", "value": "getAll", "action": "Get many labels"},
]

LABEL_FIELDS = [
    {
        "displayName": "Name",
        "name": "name",
        "type": "string",
        "default": "",
        "required": True,
        "placeholder": "invoices",
        "description": "Label Name",
        "displayOptions": _show("label", "create"),
    },
    {
        "displayName": "Label ID",
        "name": "labelId",
        "type": "string",
        "default": "",
        "required": True,
        "description": "The ID of the label",
        "displayOptions": _show("label", "get", "delete"),
    },
    {
        "displayName": "Return All",
        "name": "returnAll",
        "type": "boolean",
        "default": False,
        "description": "Whether to return all results or only up to a given limit",
        "displayOptions": _show("label", "getAll"),
    },
    {
        "displayName": "Limit",
        "name": "limit",
        "type": "number",
        "default": 50,
        "description": "Max number of results to return",
        "displayOptions": _show("label", "getAll"),
    },
]

GMAIL_DESCRIPTION = NodeDescription(
    display_name="Gmail",
    description="Consume the Gmail API",
    icon="file:gmail.svg",
    color="#EA4335",
    credentials=["gmailOAuth2"],
    category="communication",
    subcategory="email",
    tags=["gmail", "email", "google", "communication"],
    resources=[
        ResourceDescription(value="message", name="Message", operations=MESSAGE_OPERATIONS, fields=MESSAGE_FIELDS),
        ResourceDescription(value="label", name="Label", operations=LABEL_OPERATIONS, fields=LABEL_FIELDS),
    ],
)
