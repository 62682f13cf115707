"""Shared fixtures."""
from datetime import datetime, timezone

import pytest

from connector_generator.models.schema import (
    MultiOperationSchema,
    OperationParameter,
    OperationSchema,
    ResourceDefinition,
    ResourceOperation,
)

FIXED_MOMENT = datetime(2024, 1, 2, 3, 4, 5, 678000, tzinfo=timezone.utc)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_MOMENT


@pytest.fixture
def acme_schema() -> OperationSchema:
    """A service without any built-in conventions."""
    return OperationSchema(
        node_id="acme",
        node_name="Acme",
        resource="ticket",
        resource_name="Ticket",
        operation="create",
        operation_name="Create",
        display_name="Acme - Create Ticket",
        description="Create a ticket in Acme",
        parameters=[
            OperationParameter(name="title", display_name="Title", required=True, description="Ticket title"),
            OperationParameter(
                name="urgent",
                display_name="Urgent",
                type="boolean",
                default=True,
                description="Flag the ticket as urgent",
            ),
            OperationParameter(
                name="priority",
                display_name="Priority",
                type="options",
                options=[
                    {"name": "Low", "value": "low"},
                    {"name": "High", "value": "high"},
                ],
            ),
        ],
    )


@pytest.fixture
def send_reply_schema() -> MultiOperationSchema:
    """Two operations sharing the "message" parameter name."""
    message = OperationParameter(name="message", display_name="Message", required=True, description="Body")
    return MultiOperationSchema(
        node_id="mailer",
        node_name="Mailer",
        display_name="Mailer Connector",
        description="Send and reply to mail",
        category="communication",
        resources=[
            ResourceDefinition(
                value="message",
                name="Message",
                operations=[
                    ResourceOperation(
                        value="send",
                        name="Send",
                        parameters=[
                            OperationParameter(name="to", display_name="To", required=True, description="Recipient"),
                            message,
                        ],
                    ),
                    ResourceOperation(
                        value="reply",
                        name="Reply",
                        parameters=[
                            OperationParameter(
                                name="messageId",
                                display_name="Message ID",
                                required=True,
                                description="Message to reply to",
                            ),
                            message,
                        ],
                        tier=2,
                    ),
                ],
            )
        ],
    )
