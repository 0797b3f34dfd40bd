"""
Text rendering shared by the tool handlers.

All responses are plain text blocks meant for an AI assistant: a summary,
a few readable fields and, where useful, a JSON block it can parse.
"""

import json
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Tuple

from tropipay_mcp.config import TropiPayConfig

FAILURE_MARKER = "❌"


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def json_block(data: Any) -> str:
    return f"```json\n{json.dumps(data, indent=2, ensure_ascii=False, default=str)}\n```"


def cents_to_units(amount: Any) -> str:
    """Render an amount in cents as units with two decimals (5000 -> 50.00)"""
    try:
        value = Decimal(str(amount)) / 100
    except (InvalidOperation, ValueError):
        return str(amount)
    return f"{value:.2f}"


def project(record: Mapping[str, Any], fields: Sequence[str]) -> dict:
    """Keep only the allow-listed fields present in record, in allow-list order"""
    return {name: record[name] for name in fields if name in record}


def project_rows(rows: Iterable[Any], fields: Sequence[str]) -> List[Any]:
    return [project(row, fields) if isinstance(row, Mapping) else row for row in rows]


def extract_rows(payload: Any) -> Tuple[List[Any], Optional[int]]:
    """
    Normalize list responses.

    Returns the rows and the total count when the API reports one. Accepts
    both {count, rows} envelopes and bare lists.
    """
    if isinstance(payload, list):
        return payload, len(payload)
    if isinstance(payload, Mapping):
        rows = payload.get("rows")
        if rows is None:
            rows = payload.get("data")
        if isinstance(rows, list):
            count = payload.get("count")
            return rows, count if isinstance(count, int) else len(rows)
    return [], None


def environment_footer(config: TropiPayConfig, label: str = "Retrieved") -> str:
    return f"Environment: {config.environment}\n{label}: {utc_timestamp()}"


def format_failure(title: str, error: Exception, config: TropiPayConfig, method: str,
                   causes: Optional[Sequence[str]] = None) -> str:
    """Error block naming the reason and the client operation that was attempted"""
    text = f"{FAILURE_MARKER} {title}\n\nError: {error_reason(error)}\n\n"
    if causes:
        text += "📝 Possible causes:\n" + "\n".join(f"- {cause}" for cause in causes) + "\n\n"
    text += (
        f"🔧 Technical details:\n"
        f"Environment: {config.environment}\n"
        f"Method attempted: {method}"
    )
    return text


def format_missing_fields(title: str, missing: Sequence[Tuple[str, str]], example: Optional[Mapping[str, Any]] = None,
                          note: Optional[str] = None) -> str:
    """List every missing field in one message"""
    lines = "\n".join(f"- **{name}**: {description}" for name, description in missing)
    text = (
        f"{FAILURE_MARKER} Missing Required Fields for {title}\n\n"
        f"The following mandatory fields are missing or empty:\n\n{lines}\n\n"
        f"📝 **Please provide all required fields.**"
    )
    if example:
        text += f"\n\nExample usage:\n{json_block(dict(example))}"
    if note:
        text += f"\n\n💡 **Note**: {note}"
    return text


def format_invalid_field(title: str, field: str, error: Exception) -> str:
    return (
        f"{FAILURE_MARKER} Invalid Argument for {title}\n\n"
        f"- **{field}**: {error_reason(error)}\n\n"
        f"📝 **Please correct the value and try again.**"
    )


def error_reason(error: Exception) -> str:
    message = str(error).strip()
    return message or type(error).__name__
