"""Static schema of the n8n Slack node."""
from typing import Optional

from connector_generator.models.schema import OperationParameter, OperationSchema, ParameterOption


SLACK_SEND_MESSAGE = OperationSchema(
    node_id="slack",
    node_name="Slack",
    resource="message",
    resource_name="Message",
    operation="send",
    operation_name="Send",
    display_name="Slack - Send Message",
    description="Send a message to a Slack channel",
    icon="file:slack.svg",
    color="#4A154B",
    credentials=["slackApi", "slackOAuth2Api"],
    parameters=[
        OperationParameter(
            name="channel",
            display_name="Channel",
            type="string",
            required=True,
            description="The Slack channel to send the message to (e.g., #general or channel ID)",
            placeholder="#general",
        ),
        OperationParameter(
            name="text",
            display_name="Message Text",
            type="string",
            required=True,
            description="The text content of the message to send",
            placeholder="Hello from Catalyst!",
        ),
    ],
    category="communication",
    subcategory="messaging",
    tags=["slack", "message", "chat", "notification", "communication"],
)

# Alternative naming of the same call. Defined for reference; not registered.
SLACK_POST_MESSAGE = OperationSchema(
    node_id="slack",
    node_name="Slack",
    resource="message",
    resource_name="Message",
    operation="postMessage",
    operation_name="Post",
    display_name="Slack - Post Message",
    description="Post a message to a Slack channel or direct message",
    icon="file:slack.svg",
    color="#4A154B",
    credentials=["slackApi", "slackOAuth2Api"],
    parameters=[
        OperationParameter(
            name="select",
            display_name="Send Message To",
            type="options",
            required=True,
            description="Whether to send to a channel or user",
            default="channel",
            options=[
                ParameterOption(name="Channel", value="channel"),
                ParameterOption(name="User", value="user"),
            ],
        ),
        OperationParameter(
            name="channelId",
            display_name="Channel",
            type="string",
            required=True,
            description="The channel to send the message to",
            placeholder="#general",
        ),
        OperationParameter(
            name="text",
            display_name="Message Text",
            type="string",
            required=True,
            description="The message text to send",
        ),
        OperationParameter(
            name="messageType",
            display_name="Message Type",
            type="options",
            default="text",
            options=[
                ParameterOption(name="Simple Text", value="text"),
                ParameterOption(name="Blocks", value="block"),
                ParameterOption(name="Attachments", value="attachment"),
            ],
        ),
    ],
    category="communication",
    subcategory="messaging",
    tags=["slack", "message", "chat", "notification", "communication"],
)

SLACK_OPERATIONS: list[OperationSchema] = [
    SLACK_SEND_MESSAGE,
]


def get_slack_operation(operation: str) -> Optional[OperationSchema]:
    """Find a Slack operation by code or display name (case-insensitive)."""
    wanted = operation.lower()
    for schema in SLACK_OPERATIONS:
        if schema.operation.lower() == wanted or schema.operation_name.lower() == wanted:
            return schema
    return None


def get_all_slack_operations() -> list[OperationSchema]:
    return list(SLACK_OPERATIONS)
