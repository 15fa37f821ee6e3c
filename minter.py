"""Adaptive mint orchestration: config -> price -> schedule -> fee -> executor."""
import random, time
from dataclasses import dataclass
from typing import Optional
from web3 import Web3
from web3.exceptions import Web3Exception

from chain import create_contract, format_unix_timestamp, get_fee_plan, load_abi, parse_ether_amount, wait_for_block_time
from errors import ConfigResolutionFailure, ScheduleError
from helpers import log
from nft import DEFAULT_VARIANT, execute_mint, get_collection_info, get_config_with_fallback
from prompts import SCHEDULED

@dataclass
class MintSession:
    """Run-wide state. `variant` is written by the price decision and by a successful mint only."""
    variant: str = DEFAULT_VARIANT

@dataclass(frozen=True)
class MintDecision:
    price: int
    zero_price_observed: bool
    variant: str
    start_time: Optional[int] = None
    from_contract: bool = False

def decide_price(resolved, use_contract_price, ask_manual_price, session) -> MintDecision:
    """Pick the contract price when it is usable, otherwise the operator's.

    `ask_manual_price()` must return a positive decimal string (ether units);
    anything else raises InvalidManualInput.
    """
    zero_price = bool(resolved and resolved.zero_price)
    start_time = resolved.config.public_stage_start_time if resolved else None
    if resolved and use_contract_price and not zero_price and resolved.config.public_stage_price > 0:
        session.variant = resolved.variant
        return MintDecision(resolved.config.public_stage_price, False, resolved.variant, start_time, from_contract=True)
    price = parse_ether_amount(ask_manual_price())
    session.variant = DEFAULT_VARIANT
    return MintDecision(price, zero_price, DEFAULT_VARIANT, start_time)

def should_schedule(mode, resolved, now) -> bool:
    return (
        mode == SCHEDULED
        and resolved is not None
        and resolved.config.public_stage_price != 0
        and resolved.config.public_stage_start_time > now
    )

def apply_success_variant(session, result) -> bool:
    if not result.variant or result.variant == session.variant:
        return False
    log.warning(f"Updated mint method to: {result.variant}")
    session.variant = result.variant
    return True

def _resolve_config(make_contract):
    try:
        return get_config_with_fallback(make_contract)
    except ConfigResolutionFailure as e:
        for variant, reason in e.attempts:
            log.warning(f"getConfig [{variant}] failed: {reason}")
    except (Web3Exception, OSError) as e:
        log.warning(f"Config lookup error: {e}")
    log.error("Error retrieving config from contract")
    return None

def _wait_for_start(gate, start_time):
    log.warning("Scheduling Mint...")
    log.info(f"Mint scheduled for [{format_unix_timestamp(start_time)}]")
    try:
        gate.wait_until(start_time)
    except ScheduleError as e:
        log.error(f"Error scheduling startTime: {e}")
        return False
    log.success("Starting mint now!")
    return True

def run_mint(settings, w3, account, prompter, gate, session=None, clock=time.time, rng=random, sleep=time.sleep):
    """One full interactive mint. Returns the MintResult; fatal problems raise MintError."""
    session = session or MintSession()
    net = settings.network

    mode = prompter.mint_mode()
    address = prompter.contract_address()
    abis = {}
    def make_contract(name):
        if name not in abis:
            abis[name] = load_abi(name)
        return create_contract(w3, address, abis[name])

    info = get_collection_info(make_contract("NFT"))
    if info:
        log.info(f"Collection: {info.label()}")

    use_contract_price = prompter.use_contract_price()
    resolved = None
    if use_contract_price:
        resolved = _resolve_config(make_contract)
    else:
        log.warning("Manual price input requested")

    def ask_manual_price():
        if use_contract_price:
            log.error("Unable to retrieve Price from contract")
        return prompter.manual_price()

    decision = decide_price(resolved, use_contract_price, ask_manual_price, session)
    shown = Web3.from_wei(decision.price, "ether")
    if decision.from_contract:
        log.success(f"Price obtained from contract - [{shown} {net.symbol}]")
        if resolved.config.max_supply:
            log.info(f"Supply: {resolved.config.max_supply}")
    else:
        log.info(f"Price is set to [{shown} {net.symbol}]")

    if should_schedule(mode, resolved, clock()) and _wait_for_start(gate, decision.start_time):
        chain_ts = wait_for_block_time(w3, decision.start_time, sleep=sleep)
        if not isinstance(chain_ts, int) or chain_ts < decision.start_time:
            log.warning(f"Latest block still at {chain_ts}, before start {decision.start_time}")

    plan = get_fee_plan(w3, settings.gas_limit_min, settings.gas_limit_max, rng)
    log.info(f"Using gasLimit: [{plan.gas_limit}] variant: [{session.variant}]")

    result = execute_mint(
        w3, make_contract, account, plan.gas_limit, plan.fee_per_gas,
        session.variant, decision.price, net.tx_explorer, chain_id=net.chain_id,
    )
    apply_success_variant(session, result)
    log.success(f"Minted in block {result.block_number}: {result.url}")
    return result
