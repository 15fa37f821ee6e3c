from web3.exceptions import ContractLogicError

SENDER = "0x" + "11" * 20
CONTRACT = "0x" + "22" * 20

def revert(msg="execution reverted"):
    return ContractLogicError(msg)

class FakeFn:
    def __init__(self, name, args, outcome):
        self.name = name
        self.args = args
        self.outcome = outcome
        self.calls = []
        self.block_ids = []
        self.built = None

    def call(self, tx=None, block_identifier=None):
        self.calls.append(tx)
        self.block_ids.append(block_identifier)
        if isinstance(self.outcome, Exception):
            raise self.outcome
        if callable(self.outcome):
            return self.outcome(tx, block_identifier)
        return self.outcome

    def build_transaction(self, params):
        self.built = dict(params)
        return dict(params, to=CONTRACT, data="0xfeed")

class _Functions:
    def __init__(self, contract):
        self._contract = contract

    def __getattr__(self, name):
        outcome = self._contract.outcomes.get(name, revert(f"no {name}"))
        def make(*args):
            fn = FakeFn(name, args, outcome)
            self._contract.invoked.append(fn)
            return fn
        return make

class FakeContract:
    """Stand-in for a web3 contract: `outcomes` maps function name to a return value or exception."""

    def __init__(self, **outcomes):
        self.outcomes = outcomes
        self.invoked = []
        self.functions = _Functions(self)

    def built(self):
        return [fn for fn in self.invoked if fn.built is not None]

class FakeEth:
    def __init__(self, block=None, receipt=None, send_error=None, receipt_error=None, blocks=None):
        self.block = {"baseFeePerGas": 1_000_000_000, "timestamp": 1_900_000_000} if block is None else block
        # successive get_block results; the last one repeats
        self.blocks = list(blocks or [])
        self.latest = self.block
        self.receipt = {"status": 1, "blockNumber": 42} if receipt is None else receipt
        self.send_error = send_error
        self.receipt_error = receipt_error
        self.sent = []
        self.chain_id = 10143

    def get_block(self, ident):
        if self.blocks:
            self.latest = self.blocks.pop(0) if len(self.blocks) > 1 else self.blocks[0]
        else:
            self.latest = self.block
        return self.latest

    def get_transaction_count(self, address):
        return 7

    def send_raw_transaction(self, raw):
        if self.send_error:
            raise self.send_error
        self.sent.append(raw)
        return bytes.fromhex("ab" * 32)

    def wait_for_transaction_receipt(self, txh, timeout=None):
        if self.receipt_error:
            raise self.receipt_error
        return self.receipt

class FakeW3:
    def __init__(self, **kw):
        self.eth = FakeEth(**kw)

    @staticmethod
    def to_hex(value):
        return "0x" + value.hex()

class FakeAccount:
    address = SENDER

    def __init__(self):
        self.signed = []

    def sign_transaction(self, tx):
        self.signed.append(tx)
        return type("Signed", (), {"raw_transaction": b"signed-tx"})()

TWO_CFG = (1000, 5, (1_700_000_000, 1_800_000_000, 10**16))
FOUR_CFG = (2000, 3, "ipfs://base/", (1_700_000_100, 1_800_000_000, 2 * 10**16))
