#!/usr/bin/env python3
"""Manual client for the code converter service.

Usage:
  python scripts/convert_client.py [--url http://127.0.0.1:8080] [--source SQL] [--target Java] [FILE]

Reads source code from FILE (or a built-in SQL sample) and prints the converted code.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

import aiohttp

SAMPLE_SQL = "SELECT * FROM users WHERE id = 1"


async def convert(url: str, *, source_code: str, source_language: str, target_language: str) -> int:
    payload = {
        "sourceCode": source_code,
        "sourceLanguage": source_language,
        "targetLanguage": target_language,
    }
    endpoint = f"{url.rstrip('/')}/api/convert"
    print(f"POST {endpoint} ({source_language} -> {target_language})\n")

    async with aiohttp.ClientSession() as session:
        async with session.post(endpoint, json=payload) as resp:
            body = await resp.json()

    if not body.get("success"):
        print(f"status={resp.status} error={body.get('error')}", file=sys.stderr)
        return 1
    print(body.get("convertedCode") or "")
    return 0


def main() -> int:
    parser = argparse.ArgumentParser(description="Convert code through the running service")
    parser.add_argument("file", nargs="?", help="file containing the source code")
    parser.add_argument("--url", default="http://127.0.0.1:8080")
    parser.add_argument("--source", default="SQL")
    parser.add_argument("--target", default="Java")
    parser.add_argument("--raw", action="store_true", help="print the full JSON request body and exit")
    args = parser.parse_args()

    source_code = Path(args.file).read_text(encoding="utf-8") if args.file else SAMPLE_SQL
    if args.raw:
        print(json.dumps({"sourceCode": source_code, "sourceLanguage": args.source, "targetLanguage": args.target}))
        return 0
    return asyncio.run(
        convert(args.url, source_code=source_code, source_language=args.source, target_language=args.target)
    )


if __name__ == "__main__":
    sys.exit(main())
