#!/usr/bin/env python3
import sys, signal, argparse, threading
from web3.exceptions import Web3Exception

from chain import create_provider, create_wallet
from errors import ConfigError, MintCancelled, MintError
from helpers import banner, log
from minter import MintSession, run_mint
from prompts import Prompter
from schedule import ScheduleGate
from settings import DEFAULT_CONFIG, load_settings

EXIT_OK, EXIT_FAIL, EXIT_CONFIG, EXIT_CANCELLED = 0, 1, 2, 130

def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Mint one NFT from an EVM contract")
    p.add_argument("--config", default=DEFAULT_CONFIG, help="path to config.yaml")
    p.add_argument("--env-file", default=".env", help="dotenv file with PRIVATE_KEY / NETWORK / RPC_URL")
    return p.parse_args(argv)

def install_shutdown(cancel, gate):
    # during the scheduled wait the gate unwinds itself; anywhere else abort on the spot
    def handler(signum, frame):
        cancel.set()
        if not gate.waiting:
            raise MintCancelled(f"Received signal {signum}")
    return signal.signal(signal.SIGTERM, handler)

def main(argv=None, prompter=None):
    args = parse_args(argv)
    banner()
    try:
        settings = load_settings(args.config, args.env_file)
    except ConfigError as e:
        log.error(str(e))
        return EXIT_CONFIG
    if not settings.private_keys:
        log.error("No wallet configured: set PRIVATE_KEY or `wallets` in config")
        return EXIT_CONFIG

    w3 = create_provider(settings.network.rpc_url)
    try:
        account = create_wallet(settings.private_keys[0])
    except ValueError as e:
        log.error(f"Bad private key: {e}")
        return EXIT_CONFIG
    log.info(f"Network: {settings.network.name}  Wallet: {account.address}")

    cancel = threading.Event()
    gate = ScheduleGate(cancel)
    previous = install_shutdown(cancel, gate)
    session = MintSession()
    try:
        run_mint(settings, w3, account, prompter or Prompter(), gate, session)
    except (MintCancelled, KeyboardInterrupt):
        print()
        log.warning("Cancelled.")
        return EXIT_CANCELLED
    except (MintError, Web3Exception, OSError) as e:
        log.error(f"Execution error: {e}")
        return EXIT_FAIL
    finally:
        signal.signal(signal.SIGTERM, previous)
    log.success("Minting process completed!")
    return EXIT_OK

def main_cli():
    sys.exit(main())

if __name__ == "__main__":
    main_cli()
