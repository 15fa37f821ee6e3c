import sys, random, json, time
from decimal import Decimal, Inexact, InvalidOperation, localcontext
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from web3 import Web3
from eth_account import Account

from errors import FeePreconditionFailure, InvalidManualInput

# source checkout / editable install first, then the data-files location of a regular install
ABI_DIR = Path(__file__).resolve().parent / "abi"
if not ABI_DIR.is_dir():
    ABI_DIR = Path(sys.prefix) / "abi"

FEE_MULTIPLIER_NUM = 125
FEE_MULTIPLIER_DEN = 100

@dataclass(frozen=True)
class FeePlan:
    fee_per_gas: int
    gas_limit: int

def create_provider(rpc_url):
    return Web3(Web3.HTTPProvider(rpc_url))

def create_wallet(private_key):
    return Account.from_key(private_key)

def load_abi(name):
    return json.loads((ABI_DIR / f"{name}.json").read_text())["abi"]

def create_contract(w3, address, abi):
    return w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)

def get_random_gas_limit(lo, hi, rng=random):
    lo, hi = int(lo), int(hi)
    if lo > hi:
        raise ValueError(f"gas limit min {lo} > max {hi}")
    return rng.randint(lo, hi)

def bump_fee(base_fee: int) -> int:
    return base_fee * FEE_MULTIPLIER_NUM // FEE_MULTIPLIER_DEN

def get_fee_plan(w3, gas_min, gas_max, rng=random) -> FeePlan:
    block = w3.eth.get_block("latest")
    base_fee = block.get("baseFeePerGas") if hasattr(block, "get") else None
    if isinstance(base_fee, bool) or not isinstance(base_fee, int) or base_fee < 0:
        raise FeePreconditionFailure(f"Latest block has no usable baseFeePerGas: {base_fee!r}")
    return FeePlan(fee_per_gas=bump_fee(base_fee), gas_limit=get_random_gas_limit(gas_min, gas_max, rng))

BLOCK_TIME_POLL = 0.5
BLOCK_TIME_MAX_WAIT = 60

def wait_for_block_time(w3, target_ts, sleep=time.sleep, clock=time.monotonic, poll=BLOCK_TIME_POLL, max_wait=BLOCK_TIME_MAX_WAIT):
    """Poll until the latest block is stamped at or after `target_ts`.

    Returns the last timestamp seen, which is still short of `target_ts` if
    `max_wait` seconds pass first.
    """
    deadline = clock() + max_wait
    while True:
        ts = w3.eth.get_block("latest").get("timestamp")
        if isinstance(ts, int) and ts >= target_ts:
            return ts
        if clock() >= deadline:
            return ts
        sleep(poll)

def format_unix_timestamp(ts):
    return datetime.fromtimestamp(int(ts)).strftime("%Y-%m-%d %H:%M:%S")

def tx_url(explorer, tx_hash):
    h = tx_hash if str(tx_hash).startswith("0x") else f"0x{tx_hash}"
    return f"{explorer.rstrip('/')}/{h}"

ETHER_DECIMALS = 18

def parse_ether_amount(text) -> int:
    """'0.05' -> 50000000000000000 wei. Must be a positive decimal with at most 18 places."""
    raw = str(text).strip()
    try:
        value = Decimal(raw)
    except InvalidOperation:
        raise InvalidManualInput(f"Not a number: {raw!r}")
    if not value.is_finite():
        raise InvalidManualInput(f"Not a number: {raw!r}")
    if value <= 0:
        raise InvalidManualInput("Price must be greater than 0")
    if value.adjusted() > 40:
        raise InvalidManualInput("Price is too large")
    try:
        with localcontext() as ctx:
            ctx.prec = 100
            ctx.traps[Inexact] = True
            wei = value.scaleb(ETHER_DECIMALS)
    except Inexact:
        raise InvalidManualInput("Too many digits")
    if wei != wei.to_integral_value():
        raise InvalidManualInput(f"At most {ETHER_DECIMALS} decimal places")
    return int(wei)
