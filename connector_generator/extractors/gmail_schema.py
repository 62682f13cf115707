"""Static schema of the n8n Gmail node (message resource)."""
from typing import Optional

from connector_generator.models.schema import OperationParameter, OperationSchema


def _gmail_operation(
    operation: str,
    operation_name: str,
    display_name: str,
    description: str,
    parameters: list[OperationParameter],
    tags: list[str],
) -> OperationSchema:
    return OperationSchema(
        node_id="gmail",
        node_name="Gmail",
        resource="message",
        resource_name="Message",
        operation=operation,
        operation_name=operation_name,
        display_name=display_name,
        description=description,
        icon="file:gmail.svg",
        color="#EA4335",
        credentials=["gmailOAuth2"],
        parameters=parameters,
        category="communication",
        subcategory="email",
        tags=tags,
    )


def _message_id(description: str) -> OperationParameter:
    return OperationParameter(
        name="messageId",
        display_name="Message ID",
        type="string",
        required=True,
        description=description,
        placeholder="18a1b2c3d4e5f6g7",
    )


GMAIL_SEND_EMAIL = _gmail_operation(
    "send",
    "Send",
    "Gmail - Send Email",
    "Send an email using Gmail",
    [
        OperationParameter(
            name="to",
            display_name="To",
            required=True,
            description="Email address of the recipient",
            placeholder="recipient@example.com",
        ),
        OperationParameter(
            name="subject",
            display_name="Subject",
            required=True,
            description="Subject line of the email",
            placeholder="Email subject",
        ),
        OperationParameter(
            name="message",
            display_name="Message",
            required=True,
            description="The body content of the email (plain text or HTML)",
            placeholder="Your email message here",
        ),
        OperationParameter(
            name="cc",
            display_name="CC",
            description="Email addresses to CC (comma-separated)",
            placeholder="cc@example.com",
        ),
        OperationParameter(
            name="bcc",
            display_name="BCC",
            description="Email addresses to BCC (comma-separated)",
            placeholder="bcc@example.com",
        ),
    ],
    ["gmail", "email", "google", "send", "communication"],
)

GMAIL_GET_EMAIL = _gmail_operation(
    "get",
    "Get",
    "Gmail - Get Email",
    "Retrieve a specific email from Gmail",
    [_message_id("The ID of the email message to retrieve")],
    ["gmail", "email", "google", "read", "communication"],
)

GMAIL_REPLY = _gmail_operation(
    "reply",
    "Reply",
    "Gmail - Reply to Email",
    "Reply to an existing email in Gmail",
    [
        _message_id("The ID of the email message to reply to"),
        OperationParameter(
            name="message",
            display_name="Reply Message",
            required=True,
            description="The content of your reply",
            placeholder="Your reply here",
        ),
    ],
    ["gmail", "email", "google", "reply", "communication"],
)

GMAIL_ADD_LABEL = _gmail_operation(
    "addLabel",
    "Add Label",
    "Gmail - Add Label",
    "Add a label to an email in Gmail",
    [
        _message_id("The ID of the email message"),
        OperationParameter(
            name="labelId",
            display_name="Label ID",
            required=True,
            description="The ID of the label to add",
            placeholder="Label_123",
        ),
    ],
    ["gmail", "email", "google", "label", "organize", "communication"],
)

GMAIL_OPERATIONS: list[OperationSchema] = [
    GMAIL_SEND_EMAIL,
    GMAIL_GET_EMAIL,
    GMAIL_REPLY,
    GMAIL_ADD_LABEL,
]


def get_gmail_operation(operation: str) -> Optional[OperationSchema]:
    """Find a Gmail operation by code or display name (case-insensitive)."""
    wanted = operation.lower()
    for schema in GMAIL_OPERATIONS:
        if schema.operation.lower() == wanted or schema.operation_name.lower() == wanted:
            return schema
    return None


def get_all_gmail_operations() -> list[OperationSchema]:
    return list(GMAIL_OPERATIONS)
