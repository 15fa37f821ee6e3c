from colorama import Fore, Style
from web3 import Web3

from chain import parse_ether_amount
from errors import InvalidManualInput

INSTANT = "Instant Mint"
SCHEDULED = "Scheduled Mint"
MODES = (INSTANT, SCHEDULED)

def _q(message):
    return f"{Fore.BLUE}? {message}{Style.RESET_ALL} "

class Prompter:
    """Operator I/O on the terminal. Every method loops until the answer validates."""

    def __init__(self, input_fn=input):
        self.input_fn = input_fn

    def ask(self, message, validate=None, default=None):
        while True:
            raw = self.input_fn(_q(message)).strip()
            if not raw and default is not None:
                raw = default
            err = validate(raw) if validate else None
            if not err:
                return raw
            print(f"{Fore.RED}  {err}{Style.RESET_ALL}")

    def choose(self, message, choices):
        for i, c in enumerate(choices, 1):
            print(f"  {Fore.CYAN if i == 1 else ''}{i}) {c}{Style.RESET_ALL}")
        def check(raw):
            if raw.isdigit() and 1 <= int(raw) <= len(choices):
                return None
            return f"Pick 1-{len(choices)}"
        return choices[int(self.ask(message, check, default="1")) - 1]

    def confirm(self, message, default=True):
        hint = "Y/n" if default else "y/N"
        def check(raw):
            return None if raw.lower() in ("y", "yes", "n", "no") else "Answer y or n"
        raw = self.ask(f"{message} ({hint})", check, default="y" if default else "n")
        return raw.lower() in ("y", "yes")

    def mint_mode(self):
        return self.choose("Minting Mode:", MODES)

    def contract_address(self):
        raw = self.ask("NFT Contract Address:", lambda a: None if Web3.is_address(a) else "Please enter a valid address")
        return Web3.to_checksum_address(raw)

    def use_contract_price(self):
        return self.confirm("Get price from contract?", default=True)

    def manual_price(self):
        def check(raw):
            try:
                parse_ether_amount(raw)
            except InvalidManualInput as e:
                return str(e)
            return None
        return self.ask("MINT_PRICE:", check)
