#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging

from gax import CallContext, OperationsClient, PaginationError, create_operations_stub


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="List long-running operations page by page")
    p.add_argument("name", nargs="?", default="operations")
    p.add_argument("--filter", default="")
    p.add_argument("--page-size", type=int, default=10)
    p.add_argument("--page-cap", type=int, default=0)
    p.add_argument("--endpoint", default=None)
    p.add_argument("--timeout", type=float, default=5.0)
    p.add_argument("-v", "--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    def context() -> CallContext:
        ctx = CallContext()
        ctx.set_deadline(args.timeout)
        return ctx

    stub = create_operations_stub(endpoint=args.endpoint)
    async with OperationsClient(stub, context_factory=context) as client:
        result = client.list_operations(
            args.name, args.filter, page_size=args.page_size, page_cap=args.page_cap
        )
        print("=" * 65)
        print(f"{'Name':45} | {'Done':>5} | {'Error':>9}")
        print("-" * 65)
        try:
            page_no = 0
            async for page in result.pages():
                page_no += 1
                for op in page:
                    error = op.error.code if op.error else ""
                    print(f"{op.name:45} | {str(op.done):>5} | {error:>9}")
            print("=" * 65)
            print(f"Pages read : {page_no}")
        except PaginationError as e:
            print(f"Listing stopped after {e.pages_fetched} page(s): {e.status}")


if __name__ == "__main__":
    asyncio.run(main())
