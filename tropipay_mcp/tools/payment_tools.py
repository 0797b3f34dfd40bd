import logging
from typing import Any, Mapping, Optional

from tropipay_mcp.context import ToolContext
from tropipay_mcp.exceptions import InvalidFieldError, MissingFieldsError
from tropipay_mcp.formatting import (
    cents_to_units, environment_footer, extract_rows, format_failure,
    format_invalid_field, format_missing_fields, json_block, project_rows,
)
from tropipay_mcp.models import PaymentCardRequest

logger = logging.getLogger(__name__)

PAYMENT_CARD_FIELDS = (
    "id", "reference", "concept", "description", "amount", "currency", "shortUrl",
    "paymentUrl", "singleUse", "favorite", "expirationDays", "state", "createdAt",
)

PAYMENT_CARD_EXAMPLE = {
    "concept": "Product Purchase",
    "amount": 5000,
    "currency": "USD",
    "description": "Purchase of premium service",
}

# (label, response field) pairs shown in the creation summary
PAYMENT_CARD_DETAILS = (
    ("Paymentcard id", "id"),
    ("Short url", "shortUrl"),
    ("Reference", "reference"),
    ("Concept", "concept"),
    ("Marked as favorite", "favorite"),
    ("Single use paymentcard", "singleUse"),
    ("Expiration days", "expirationDays"),
    ("Reason id", "reasonId"),
    ("Language", "lang"),
    ("Url success", "urlSuccess"),
    ("Url failed", "urlFailed"),
    ("Url notification", "urlNotification"),
    ("Service date", "serviceDate"),
)


def list_paymentcards(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    try:
        cards_data = context.get_client().list_payment_cards()
    except Exception as e:
        logger.error(f"Error listing payment cards: {str(e)}")
        return format_failure("Failed to retrieve payment cards", e, context.config, "client.list_payment_cards()")

    cards, count = extract_rows(cards_data)
    if not cards:
        return f"💳 No payment cards found\n\nEnvironment: {context.config.environment}"

    return (
        f"💳 TropiPay Payment Cards ({count} total, showing {len(cards)}; amounts in cents)\n\n"
        + environment_footer(context.config)
        + f"\n\n**Raw Data (JSON):**\n{json_block(project_rows(cards, PAYMENT_CARD_FIELDS))}"
    )


def create_paymentcard(arguments: Optional[Mapping[str, Any]], context: ToolContext) -> str:
    """
    Create a payment link.

    Only concept, amount and currency are required; every other field gets
    its documented default before the single creation call.
    """
    try:
        request = PaymentCardRequest.from_arguments(arguments)
    except MissingFieldsError as e:
        return format_missing_fields("Payment Card Creation", e.missing, PAYMENT_CARD_EXAMPLE,
                                     "Amount should be in cents (e.g., 5000 = $50.00)")
    except InvalidFieldError as e:
        return format_invalid_field("Payment Card Creation", e.field, e)

    try:
        result = context.get_client().create_payment_card(request.to_payload())
    except Exception as e:
        logger.error(f"Error creating payment card: {str(e)}")
        return format_failure("Failed to create payment card", e, context.config, "client.create_payment_card()")

    card = result if isinstance(result, Mapping) else {}
    logger.info(f"Created payment card {card.get('id')} (reference {request.reference})")

    amount = card.get("amount", request.amount)
    currency = card.get("currency", request.currency)
    lines = [f"- Amount: {cents_to_units(amount)} {currency}"]
    lines += [f"- {label}: {card[key]}" for label, key in PAYMENT_CARD_DETAILS if key in card]
    if request.description:
        lines.append(f"- Description: {request.description}")

    return (
        "✅ Payment Card Created Successfully\n\n"
        "🎯 **Payment Details:**\n"
        + "\n".join(lines)
        + f"\n\n📋 **API Response:**\n{json_block(result)}\n\n"
        + environment_footer(context.config, label="Created")
    )
