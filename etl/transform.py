from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import partial
from typing import Any, Callable, Dict, List, Optional, Union

from common.categories import Category
from storage import schema

WEI_PER_ETH = 10 ** 18
EMPTY_CALL = "0x"
NATIVE_SYMBOL = "ETH"
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"
MAX_DECIMALS = 308


def _parse_int(value, allow_hex: bool = True) -> Optional[int]:
    """Parse a decimal (or 0x-hex) integer; None when it cannot be parsed."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    s = str(value).strip().lower()
    try:
        return int(s, 16) if allow_hex and s.startswith("0x") else int(s)
    except ValueError:
        return None


def _parse_float(value) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        num = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    # nan and inf parse fine but are not amounts
    return num if math.isfinite(num) else None


def format_time(ts) -> str:
    secs = _parse_int(ts, allow_hex=False)
    if secs is None:
        return ""
    try:
        return datetime.fromtimestamp(secs, tz=timezone.utc).strftime(TIME_FORMAT)
    except (OverflowError, OSError, ValueError):
        return ""


def safe_div(value, denom) -> Union[float, int]:
    num = _parse_float(value)
    if num is None or not denom:
        return 0
    try:
        quotient = num / denom
    except (OverflowError, TypeError):
        return 0
    return quotient if math.isfinite(quotient) else 0


def safe_gas_fee(gas_used, gas_price) -> Union[float, int]:
    used = _parse_int(gas_used)
    price = _parse_int(gas_price)
    if used is None or price is None:
        return 0
    try:
        return used * price / WEI_PER_ETH
    except OverflowError:
        return 0


def _field(key: str) -> Callable[[dict], Any]:
    def get(tx: dict) -> Any:
        v = tx.get(key)
        return "" if v is None else v
    return get


def _const(value) -> Callable[[dict], Any]:
    return lambda tx: value


def _normal_type(tx: dict) -> str:
    return schema.ETH_TRANSFER if tx.get("input") == EMPTY_CALL else schema.CONTRACT_INTERACTION


def _wei_value(tx: dict):
    return safe_div(tx.get("value"), WEI_PER_ETH)


def _token_value(tx: dict):
    decimals = _parse_int(tx.get("tokenDecimal")) or 0
    # beyond this the scale no longer fits a float either way
    if abs(decimals) > MAX_DECIMALS:
        return 0
    return safe_div(tx.get("value"), 10 ** decimals)


def _gas_fee(tx: dict):
    return safe_gas_fee(tx.get("gasUsed"), tx.get("gasPrice"))


@dataclass(frozen=True)
class CategoryRules:
    """Per-category column extractors; the common columns are shared."""
    tx_type: Callable[[dict], Any]
    value: Callable[[dict], Any]
    gas_fee: Callable[[dict], Any] = _const("")
    contract: Callable[[dict], Any] = _const("")
    asset: Callable[[dict], Any] = _const(NATIVE_SYMBOL)
    token_id: Callable[[dict], Any] = _const("")


RULES: Dict[Category, CategoryRules] = {
    Category.NORMAL: CategoryRules(
        tx_type=_normal_type,
        value=_wei_value,
        gas_fee=_gas_fee,
    ),
    # the API does not attribute gas to internal calls
    Category.INTERNAL: CategoryRules(
        tx_type=_const(schema.INTERNAL_TRANSFER),
        value=_wei_value,
    ),
    Category.ERC20: CategoryRules(
        tx_type=_const(schema.ERC20),
        value=_token_value,
        contract=_field("contractAddress"),
        asset=_field("tokenSymbol"),
    ),
    Category.ERC721: CategoryRules(
        tx_type=_const(schema.ERC721),
        value=_const(1),
        contract=_field("contractAddress"),
        asset=_field("tokenName"),
        token_id=_field("tokenID"),
    ),
}

_hash = _field("hash")
_from = _field("from")
_to = _field("to")


def _normalize_one(tx: dict, rules: CategoryRules) -> dict:
    return {
        schema.TX_HASH: _hash(tx),
        schema.DATE_TIME: format_time(tx.get("timeStamp")),
        schema.FROM_ADDRESS: _from(tx),
        schema.TO_ADDRESS: _to(tx),
        schema.TX_TYPE: rules.tx_type(tx),
        schema.ASSET_CONTRACT: rules.contract(tx),
        schema.ASSET_SYMBOL: rules.asset(tx),
        schema.TOKEN_ID: rules.token_id(tx),
        schema.VALUE: rules.value(tx),
        schema.GAS_FEE: rules.gas_fee(tx),
    }


def normalize(category: Union[Category, str], raw_txs: Optional[List[dict]]) -> List[dict]:
    """
    Map raw explorer records of one category onto the export columns.
    One output record per input record, in input order. Entries that are not
    mappings still produce a record with every field defaulted.
    """
    rules = RULES[Category(category)]
    out = []
    for tx in raw_txs or []:
        if not isinstance(tx, dict):
            tx = {}
        out.append(_normalize_one(tx, rules))
    return out


format_normal = partial(normalize, Category.NORMAL)
format_internal = partial(normalize, Category.INTERNAL)
format_erc20 = partial(normalize, Category.ERC20)
format_erc721 = partial(normalize, Category.ERC721)
