"""
Interactive order table — the store, the query and the view in one loop.

Run:  python -m examples.cli                 (in-memory sample orders)
      python -m examples.cli --env           (HttpSource from ORDERVIEW_* vars)
      python -m examples.cli --url http://localhost:8080

Each command edits one criterion or touches the store, then the table is
redrawn from a fresh ViewSnapshot.
"""

from __future__ import annotations

import argparse
import asyncio

from kungfu import Ok, Error

from orderview import query as Q
from orderview.config import ConfigError, Settings, SourceConfig, configure_logging
from orderview.domain import FilterCriteria
from orderview.source import HttpSource, MemorySource
from orderview.store import CompletionPolicy, OrderSource, OrderStore
from orderview.view import view_of
from examples._infra import SAMPLE_ORDERS, print_view


# ═══════════════════════════════════════════════════════════════════════════════
# Help
# ═══════════════════════════════════════════════════════════════════════════════

HELP_TEXT = """
  search <text>     Filter by customer name (blank clears)
  status <status>   all | pending | paid | shipped | cancelled
  min <amount>      Minimum total (blank clears)
  clear             Reset every filter
  refresh           Reload orders
  fail              Make the next in-memory load fail
  help              Show this help
  quit              Exit
"""


# ═══════════════════════════════════════════════════════════════════════════════
# Arguments
# ═══════════════════════════════════════════════════════════════════════════════


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Browse orders in the terminal")
    target = parser.add_mutually_exclusive_group()
    target.add_argument("--url", help="Order service base URL (uses /api/orders)")
    target.add_argument("--env", action="store_true", help="Read ORDERVIEW_* settings")
    parser.add_argument(
        "--policy",
        choices=[policy.value for policy in CompletionPolicy],
        default=CompletionPolicy.LAST_ISSUED.value,
    )
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args(argv)


def build_source(args: argparse.Namespace) -> tuple[OrderSource, CompletionPolicy]:
    policy = CompletionPolicy(args.policy)
    if args.env:
        settings = Settings.from_env()
        configure_logging(settings.log_level)
        return HttpSource(settings.source), settings.completion
    if args.url:
        return HttpSource(SourceConfig(args.url)), policy
    return MemorySource(SAMPLE_ORDERS, latency=0.05), policy


# ═══════════════════════════════════════════════════════════════════════════════
# Main Loop
# ═══════════════════════════════════════════════════════════════════════════════


def apply(criteria: FilterCriteria, cmd: str, arg: str) -> FilterCriteria:
    match cmd:
        case "search":
            return criteria.with_search(Q.parse_search(arg))
        case "status":
            match Q.parse_status(arg or "all"):
                case Ok(status):
                    return criteria.with_status(status)
                case Error(invalid):
                    print(f"  ✗ {invalid}")
        case "min":
            match Q.parse_min_total(arg):
                case Ok(minimum):
                    return criteria.with_min_total(minimum)
                case Error(invalid):
                    print(f"  ✗ {invalid}")
    return criteria


async def run_cli(store: OrderStore, source: OrderSource) -> None:
    criteria = FilterCriteria()
    print(HELP_TEXT)

    await store.load()
    print_view(view_of(store, criteria))

    while True:
        try:
            line = input("\n> ").strip()
        except (EOFError, KeyboardInterrupt):
            print("\nBye!")
            break

        if not line:
            continue

        cmd, _, arg = line.partition(" ")
        cmd = cmd.lower()
        arg = arg.strip()

        match cmd:
            case "quit" | "exit" | "q":
                print("Bye!")
                break
            case "help" | "h" | "?":
                print(HELP_TEXT)
                continue
            case "search" | "status" | "min":
                criteria = apply(criteria, cmd, arg)
            case "clear":
                criteria = FilterCriteria()
            case "refresh" | "r":
                await store.load()
            case "fail":
                if isinstance(source, MemorySource):
                    source.fail_next()
                    print("  next load will fail")
                else:
                    print("  ✗ only the in-memory source can simulate failures")
                continue
            case _:
                print(f"  ✗ Unknown command: {cmd}")
                print("  Type 'help' for available commands.")
                continue

        print_view(view_of(store, criteria))


async def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    configure_logging(args.log_level.upper())

    try:
        source, policy = build_source(args)
    except ConfigError as e:
        print(f"  ✗ Configuration error: {e}")
        return

    store = OrderStore(source, policy=policy)
    try:
        await run_cli(store, source)
    finally:
        if isinstance(source, HttpSource):
            await source.close()


if __name__ == "__main__":
    asyncio.run(main())
