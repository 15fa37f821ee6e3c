from dataclasses import dataclass
from typing import Optional
from eth_abi.exceptions import DecodingError
from web3.exceptions import Web3Exception

from chain import tx_url
from errors import ConfigResolutionFailure, ExecutionFailure
from helpers import log

TWO_PARAMS = "twoParams"
FOUR_PARAMS = "fourParams"
LEGACY = "legacy"

# probe / simulation priority
VARIANTS = (TWO_PARAMS, FOUR_PARAMS, LEGACY)
DEFAULT_VARIANT = TWO_PARAMS

MINT_QTY = 1
RECEIPT_TIMEOUT = 240

# a single candidate read or eth_call failing with one of these only rules out that variant
PROBE_ERRORS = (Web3Exception, DecodingError, ValueError, TypeError, IndexError)

@dataclass(frozen=True)
class MintConfig:
    public_stage_price: int
    public_stage_start_time: int
    max_supply: Optional[int] = None

@dataclass(frozen=True)
class ResolvedConfig:
    config: MintConfig
    variant: str
    zero_price: bool

@dataclass(frozen=True)
class CollectionInfo:
    name: str
    symbol: Optional[str] = None

    def label(self):
        return f"{self.name} ({self.symbol})" if self.symbol else self.name

@dataclass(frozen=True)
class MintResult:
    variant: str
    tx_hash: str
    url: str
    block_number: Optional[int] = None

def _uint(value, what):
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise ValueError(f"{what} is not a uint: {value!r}")
    return value

def _build_config(price, start_time, max_supply=None):
    supply = _uint(max_supply, "maxSupply") if max_supply is not None else None
    return MintConfig(
        public_stage_price=_uint(price, "price"),
        public_stage_start_time=_uint(start_time, "startTime"),
        max_supply=supply or None,  # 0 means uncapped
    )

def _read_two_params(contract):
    max_supply, _wallet_limit, stage = contract.functions.getConfig().call()
    start_time, _end_time, price = stage
    return _build_config(price, start_time, max_supply)

def _read_four_params(contract):
    max_supply, _wallet_limit, base_uri, stage = contract.functions.getConfig().call()
    if not isinstance(base_uri, str):
        raise TypeError("baseURI is not a string")
    start_time, _end_time, price = stage
    return _build_config(price, start_time, max_supply)

def _optional_call(fn):
    try:
        return fn().call()
    except PROBE_ERRORS:
        return None

def _read_legacy(contract):
    fns = contract.functions
    price = fns.mintPrice().call()
    start_time = fns.publicSaleStartTime().call()
    return _build_config(price, start_time, _optional_call(fns.maxSupply))

CONFIG_STRATEGIES = (
    (TWO_PARAMS, _read_two_params),
    (FOUR_PARAMS, _read_four_params),
    (LEGACY, _read_legacy),
)

def _reason(exc):
    text = str(exc).strip().splitlines()[0] if str(exc).strip() else ""
    return f"{type(exc).__name__}: {text}" if text else type(exc).__name__

def _probe(reader, contract):
    try:
        return reader(contract), None
    except PROBE_ERRORS as e:
        return None, _reason(e)

def get_config_with_fallback(make_contract, strategies=CONFIG_STRATEGIES) -> ResolvedConfig:
    """Read the public-stage config through each known layout, first success wins.

    `make_contract(variant)` returns a contract handle bound to that variant's ABI.
    Raises ConfigResolutionFailure when no layout parses.
    """
    attempts = []
    for variant, reader in strategies:
        cfg, reason = _probe(reader, make_contract(variant))
        if cfg is not None:
            return ResolvedConfig(config=cfg, variant=variant, zero_price=cfg.public_stage_price == 0)
        attempts.append((variant, reason))
    raise ConfigResolutionFailure(attempts)

def get_collection_info(contract) -> Optional[CollectionInfo]:
    # display only: an unreachable node here is left for the config read to report
    try:
        name = _optional_call(contract.functions.name)
        if not isinstance(name, str) or not name.strip():
            return None
        symbol = _optional_call(contract.functions.symbol)
    except OSError:
        return None
    symbol = symbol.strip() if isinstance(symbol, str) and symbol.strip() else None
    return CollectionInfo(name=name.strip(), symbol=symbol)

MINT_CALLS = {
    TWO_PARAMS: lambda fns, to: fns.mintPublic(to, MINT_QTY),
    FOUR_PARAMS: lambda fns, to: fns.mintPublic(to, 0, MINT_QTY, b""),
    LEGACY: lambda fns, to: fns.mint(MINT_QTY),
}

def variant_order(hint):
    if hint not in MINT_CALLS:
        raise ValueError(f"Unknown mint variant: {hint}")
    return [hint] + [v for v in VARIANTS if v != hint]

def _select_call(make_contract, sender, price, hint):
    rejected = []
    for variant in variant_order(hint):
        fn = MINT_CALLS[variant](make_contract(variant).functions, sender)
        try:
            # pending: the next block, which is where a just-opened mint window first shows
            fn.call({"from": sender, "value": price}, block_identifier="pending")
        except PROBE_ERRORS as e:
            rejected.append(f"{variant}: {_reason(e)}")
            continue
        return variant, fn
    raise ExecutionFailure("Mint rejected for every call variant (" + "; ".join(rejected) + ")")

def execute_mint(w3, make_contract, account, gas_limit, fee, hint, price, explorer_url, chain_id=None) -> MintResult:
    """Submit exactly one mint transaction.

    Call shapes are tried hint-first with eth_call; only the first one the node
    accepts is signed and broadcast.
    """
    sender = account.address
    variant, fn = _select_call(make_contract, sender, int(price), hint)

    try:
        tx = fn.build_transaction({
            "from": sender,
            "value": int(price),
            "gas": int(gas_limit),
            "gasPrice": int(fee),
            "nonce": w3.eth.get_transaction_count(sender),
            "chainId": int(chain_id) if chain_id is not None else w3.eth.chain_id,
        })
        signed = account.sign_transaction(tx)
        txh = w3.eth.send_raw_transaction(signed.raw_transaction)
    except (Web3Exception, ValueError, TypeError, OSError) as e:
        raise ExecutionFailure(f"Transaction not sent: {_reason(e)}") from e

    h = w3.to_hex(txh)
    url = tx_url(explorer_url, h) if explorer_url else h
    log.info(f"Mint tx sent: {url}")
    log.info("Waiting for receipt...")
    try:
        rec = w3.eth.wait_for_transaction_receipt(txh, timeout=RECEIPT_TIMEOUT)
    except (Web3Exception, OSError) as e:
        raise ExecutionFailure(f"No receipt for {h}: {_reason(e)}", tx_hash=h) from e
    if rec.get("status") != 1:
        raise ExecutionFailure(f"Mint transaction reverted: {url}", tx_hash=h)
    return MintResult(variant=variant, tx_hash=h, url=url, block_number=rec.get("blockNumber"))
