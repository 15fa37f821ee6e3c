import sys, time
from dataclasses import dataclass
from colorama import init, Fore, Style

init(autoreset=True)

class Log:
    def __init__(self, stream=None):
        self.stream = stream

    def _emit(self, color, tag, msg):
        out = self.stream or sys.stdout
        print(f"{color}[{tag}] {msg}{Style.RESET_ALL}", file=out, flush=True)

    def info(self, msg):
        self._emit(Fore.CYAN, "INFO", msg)

    def success(self, msg):
        self._emit(Fore.GREEN, "OK", msg)

    def warning(self, msg):
        self._emit(Fore.YELLOW, "WARN", msg)

    def error(self, msg):
        self._emit(Fore.RED, "ERR", msg)

log = Log()

@dataclass(frozen=True)
class Countdown:
    total_seconds: int
    formatted: str

def get_time_remaining(target_ts, now=None) -> Countdown:
    now = time.time() if now is None else now
    total = max(0, int(target_ts - now))
    days, rest = divmod(total, 86400)
    hours, rest = divmod(rest, 3600)
    minutes, seconds = divmod(rest, 60)
    formatted = f"{hours:02d}:{minutes:02d}:{seconds:02d}"
    if days:
        formatted = f"{days}d {formatted}"
    return Countdown(total, formatted)

def banner(title="EVM NFT MINTER", subtitle="Mint one NFT from any contract"):
    width = 35
    print(Fore.BLUE + "\n┌" + "─" * width + "┐")
    print(Fore.BLUE + "│" + Fore.WHITE + title.center(width) + Fore.BLUE + "│")
    print(Fore.BLUE + "│" + Style.DIM + subtitle.center(width) + Style.RESET_ALL + Fore.BLUE + "│")
    print(Fore.BLUE + "└" + "─" * width + "┘\n")
