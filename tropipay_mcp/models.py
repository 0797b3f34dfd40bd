"""
Request records for the parameterized TropiPay tools.

Each record is built from the raw MCP arguments by a pure from_arguments()
constructor that applies defaults and reports every missing required field at
once. to_payload() renders the JSON body the API expects.
"""

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, ClassVar, Dict, List, Mapping, Optional, Tuple

from tropipay_mcp.exceptions import InvalidFieldError, MissingFieldsError

DEFAULT_MOVEMENT_LIMIT = 10
MIN_MOVEMENT_LIMIT = 1
MAX_MOVEMENT_LIMIT = 50

DEFAULT_REASON_ID = 21
DEFAULT_LANG = 'es'
DEFAULT_USER_RELATION_TYPE = 3  # commercial
DEFAULT_BENEFICIARY_STATE = 0  # active
COUNTRY_FIELD = 'countryDestinationId/countryISO'


def is_blank(value: Any) -> bool:
    """True for absent, null and whitespace-only string values"""
    return value is None or (isinstance(value, str) and not value.strip())


def collect_missing(arguments: Mapping[str, Any], required: Mapping[str, str]) -> List[Tuple[str, str]]:
    """Return (field, description) for every required field that is blank"""
    return [(name, description) for name, description in required.items() if is_blank(arguments.get(name))]


def _as_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise InvalidFieldError(field_name, f"expected a number, got {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise InvalidFieldError(field_name, f"expected a whole number, got {value!r}")


def _as_bool(value: Any, field_name: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ('true', 'false'):
        return value.strip().lower() == 'true'
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    raise InvalidFieldError(field_name, f"expected true or false, got {value!r}")


def _provided(arguments: Mapping[str, Any], names: Tuple[str, ...]) -> Dict[str, Any]:
    """Subset of arguments among names that the caller actually set"""
    return {name: arguments[name] for name in names if not is_blank(arguments.get(name))}


def generate_reference() -> str:
    return f"MCP-{uuid.uuid4().hex[:12].upper()}"


def utc_today() -> date:
    return datetime.now(timezone.utc).date()


@dataclass
class MovementQuery:
    """Pagination for the movement listing"""
    limit: int = DEFAULT_MOVEMENT_LIMIT
    offset: int = 0

    @classmethod
    def from_arguments(cls, arguments: Optional[Mapping[str, Any]]) -> "MovementQuery":
        arguments = arguments or {}
        raw_limit = arguments.get('limit')
        raw_offset = arguments.get('offset')

        limit = DEFAULT_MOVEMENT_LIMIT if is_blank(raw_limit) else _as_int(raw_limit, 'limit')
        offset = 0 if is_blank(raw_offset) else _as_int(raw_offset, 'offset')

        return cls(
            limit=min(max(limit, MIN_MOVEMENT_LIMIT), MAX_MOVEMENT_LIMIT),
            offset=max(offset, 0),
        )


@dataclass
class PaymentCardRequest:
    """A payment link to create"""
    REQUIRED: ClassVar[Dict[str, str]] = {
        'concept': 'Payment concept/title',
        'amount': 'Payment amount (in cents, e.g., 3000 = $30.00)',
        'currency': 'Payment currency (allowed only : USD, EUR, USDC)',
    }

    concept: Any
    amount: Any
    currency: Any
    reference: str
    service_date: str
    description: str = ''
    favorite: bool = False
    single_use: bool = False
    expiration_days: int = 0
    reason_id: int = DEFAULT_REASON_ID
    lang: str = DEFAULT_LANG
    url_success: str = ''
    url_failed: str = ''
    url_notification: str = ''
    account_id: Optional[int] = None
    direct_payment: Optional[bool] = None

    @classmethod
    def from_arguments(cls, arguments: Optional[Mapping[str, Any]], today: Optional[date] = None) -> "PaymentCardRequest":
        """
        Normalize create_paymentcard arguments.

        concept, amount and currency are passed through unchanged. Every other
        field falls back to its default when it is not given.

        Raises:
            MissingFieldsError: Listing every blank required field.
            InvalidFieldError: If a flag or numeric field cannot be coerced.
        """
        arguments = arguments or {}
        missing = collect_missing(arguments, cls.REQUIRED)
        if missing:
            raise MissingFieldsError(missing)

        def get(name: str, default: Any) -> Any:
            value = arguments.get(name)
            return default if value is None else value

        account_id = arguments.get('accountId')
        direct_payment = arguments.get('directPayment')

        return cls(
            concept=arguments['concept'],
            amount=arguments['amount'],
            currency=arguments['currency'],
            reference=arguments['reference'] if not is_blank(arguments.get('reference')) else generate_reference(),
            service_date=get('serviceDate', (today or utc_today()).isoformat()),
            description=get('description', ''),
            favorite=_as_bool(get('favorite', False), 'favorite'),
            single_use=_as_bool(get('singleUse', False), 'singleUse'),
            expiration_days=_as_int(get('expirationDays', 0), 'expirationDays'),
            reason_id=_as_int(get('reasonId', DEFAULT_REASON_ID), 'reasonId'),
            lang=get('lang', DEFAULT_LANG),
            url_success=get('urlSuccess', ''),
            url_failed=get('urlFailed', ''),
            url_notification=get('urlNotification', ''),
            account_id=None if is_blank(account_id) else _as_int(account_id, 'accountId'),
            direct_payment=None if direct_payment is None else _as_bool(direct_payment, 'directPayment'),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = {
            'reference': self.reference,
            'concept': self.concept,
            'amount': self.amount,
            'currency': self.currency,
            'description': self.description,
            'favorite': self.favorite,
            'singleUse': self.single_use,
            'expirationDays': self.expiration_days,
            'reasonId': self.reason_id,
            'lang': self.lang,
            'urlSuccess': self.url_success,
            'urlFailed': self.url_failed,
            'urlNotification': self.url_notification,
            'serviceDate': self.service_date,
        }
        if self.account_id is not None:
            payload['accountId'] = self.account_id
        if self.direct_payment is not None:
            payload['directPayment'] = self.direct_payment
        return payload


@dataclass
class ExternalBeneficiaryRequest:
    """A bank account held outside TropiPay"""
    BENEFICIARY_TYPE: ClassVar[int] = 2
    ACCOUNT_TYPE: ClassVar[int] = 7
    PAYMENT_TYPE: ClassVar[int] = 2  # bank deposit
    REQUIRED: ClassVar[Dict[str, str]] = {
        'firstName': 'First name of the account holder',
        'lastName': 'Last name of the account holder',
        'accountNumber': 'IBAN or bank account number',
        'currency': 'Account currency code (e.g., EUR, USD)',
    }
    OPTIONAL: ClassVar[Tuple[str, ...]] = (
        'beneficiaryPersonType', 'secondLastName', 'email', 'swift',
        'documentExpirationDate', 'phone', 'address', 'city', 'province',
        'postalCode', 'routingNumber', 'searchBy', 'searchValue', 'correspondent',
    )

    first_name: str
    last_name: str
    account_number: str
    currency: str
    alias: str
    country_destination_id: Optional[int] = None
    country_iso: Optional[str] = None
    user_relation_type_id: int = DEFAULT_USER_RELATION_TYPE
    state: int = DEFAULT_BENEFICIARY_STATE
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_arguments(cls, arguments: Optional[Mapping[str, Any]]) -> "ExternalBeneficiaryRequest":
        arguments = arguments or {}
        missing = collect_missing(arguments, cls.REQUIRED)
        if is_blank(arguments.get('countryDestinationId')) and is_blank(arguments.get('countryISO')):
            missing.append((COUNTRY_FIELD, 'Destination country id or ISO code (one of them is required)'))
        if missing:
            raise MissingFieldsError(missing)

        country_id = arguments.get('countryDestinationId')
        country_iso = arguments.get('countryISO')
        return cls(
            first_name=arguments['firstName'],
            last_name=arguments['lastName'],
            account_number=arguments['accountNumber'],
            currency=arguments['currency'],
            alias=arguments.get('alias') or f"{arguments['firstName']} {arguments['lastName']}",
            country_destination_id=None if is_blank(country_id) else _as_int(country_id, 'countryDestinationId'),
            country_iso=None if is_blank(country_iso) else str(country_iso).strip().upper(),
            user_relation_type_id=_relation_type(arguments),
            state=_state(arguments),
            extra=_provided(arguments, cls.OPTIONAL),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload.update({
            'beneficiaryType': self.BENEFICIARY_TYPE,
            'type': self.ACCOUNT_TYPE,
            'paymentType': self.PAYMENT_TYPE,
            'alias': self.alias,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'accountNumber': self.account_number,
            'currency': self.currency,
            'userRelationTypeId': self.user_relation_type_id,
            'state': self.state,
        })
        if self.country_destination_id is not None:
            payload['countryDestinationId'] = self.country_destination_id
        if self.country_iso:
            payload['countryISO'] = self.country_iso
        return payload


@dataclass
class InternalBeneficiaryRequest:
    """Another TropiPay user, found by email"""
    BENEFICIARY_TYPE: ClassVar[int] = 1
    ACCOUNT_TYPE: ClassVar[int] = 9
    PAYMENT_TYPE: ClassVar[int] = 1
    DEFAULT_SEARCH_BY: ClassVar[int] = 1  # email
    REQUIRED: ClassVar[Dict[str, str]] = {
        'alias': "Friendly name for the beneficiary (e.g., 'MR Buchman')",
        'searchValue': 'Email of the TropiPay user to add',
    }
    OPTIONAL: ClassVar[Tuple[str, ...]] = (
        'beneficiaryPersonType', 'firstName', 'lastName', 'secondLastName', 'email', 'currency',
    )

    alias: str
    search_value: str
    account_number: str
    search_by: int = DEFAULT_SEARCH_BY
    user_relation_type_id: int = DEFAULT_USER_RELATION_TYPE
    state: int = DEFAULT_BENEFICIARY_STATE
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_arguments(cls, arguments: Optional[Mapping[str, Any]]) -> "InternalBeneficiaryRequest":
        arguments = arguments or {}
        missing = collect_missing(arguments, cls.REQUIRED)
        if missing:
            raise MissingFieldsError(missing)

        search_by = arguments.get('searchBy')
        return cls(
            alias=arguments['alias'],
            search_value=arguments['searchValue'],
            account_number=arguments.get('accountNumber') or arguments['searchValue'],
            search_by=cls.DEFAULT_SEARCH_BY if is_blank(search_by) else _as_int(search_by, 'searchBy'),
            user_relation_type_id=_relation_type(arguments),
            state=_state(arguments),
            extra=_provided(arguments, cls.OPTIONAL),
        )

    def to_payload(self) -> Dict[str, Any]:
        payload = dict(self.extra)
        payload.update({
            'beneficiaryType': self.BENEFICIARY_TYPE,
            'type': self.ACCOUNT_TYPE,
            'paymentType': self.PAYMENT_TYPE,
            'alias': self.alias,
            'searchBy': self.search_by,
            'searchValue': self.search_value,
            'accountNumber': self.account_number,
            'userRelationTypeId': self.user_relation_type_id,
            'state': self.state,
        })
        return payload


@dataclass
class CryptoBeneficiaryRequest:
    """An external crypto wallet"""
    BENEFICIARY_TYPE: ClassVar[int] = 3
    ACCOUNT_TYPE: ClassVar[int] = 12
    PAYMENT_TYPE: ClassVar[int] = 3
    REQUIRED: ClassVar[Dict[str, str]] = {
        'firstName': 'First name of the wallet owner',
        'lastName': 'Last name of the wallet owner',
        'accountNumber': 'Crypto wallet address',
        'currency': 'Currency code (e.g., USDC, BTC)',
        'network': 'Blockchain network (e.g., SOLANA, ETH)',
    }

    first_name: str
    last_name: str
    account_number: str
    currency: str
    network: str
    alias: str
    user_relation_type_id: int = DEFAULT_USER_RELATION_TYPE
    state: int = DEFAULT_BENEFICIARY_STATE

    @classmethod
    def from_arguments(cls, arguments: Optional[Mapping[str, Any]]) -> "CryptoBeneficiaryRequest":
        arguments = arguments or {}
        missing = collect_missing(arguments, cls.REQUIRED)
        if missing:
            raise MissingFieldsError(missing)

        return cls(
            first_name=arguments['firstName'],
            last_name=arguments['lastName'],
            account_number=arguments['accountNumber'],
            currency=arguments['currency'],
            network=arguments['network'],
            alias=arguments.get('alias') or f"{arguments['firstName']} {arguments['lastName']}",
            user_relation_type_id=_relation_type(arguments),
            state=_state(arguments),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            'beneficiaryType': self.BENEFICIARY_TYPE,
            'type': self.ACCOUNT_TYPE,
            'paymentType': self.PAYMENT_TYPE,
            'alias': self.alias,
            'firstName': self.first_name,
            'lastName': self.last_name,
            'accountNumber': self.account_number,
            'currency': self.currency,
            'network': self.network,
            'userRelationTypeId': self.user_relation_type_id,
            'state': self.state,
        }


def _relation_type(arguments: Mapping[str, Any]) -> int:
    value = arguments.get('userRelationTypeId')
    return DEFAULT_USER_RELATION_TYPE if is_blank(value) else _as_int(value, 'userRelationTypeId')


def _state(arguments: Mapping[str, Any]) -> int:
    value = arguments.get('state')
    return DEFAULT_BENEFICIARY_STATE if is_blank(value) else _as_int(value, 'state')
