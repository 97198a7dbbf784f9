from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

import structlog

from holdermap.config.chains import CHAIN_ALIASES, resolve_chain
from holdermap.config.log_setup import configure_logging
from holdermap.io.output_writer import write_record_json, write_report_txt
from holdermap.io.report import render_report
from holdermap.io.schemas import record_to_dict
from holdermap.services.fusion_service import TokenFusionService, fuse_token

logger = structlog.get_logger(__name__)


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="holdermap", description="Token holder clusters, supply concentration and market data")
    p.add_argument("--chain", required=True, help=f"Chain alias ({', '.join(sorted(CHAIN_ALIASES))})")
    p.add_argument("--address", required=True, help="Token contract address")
    p.add_argument("--out", default=None, help="Also write <chain>_<address>.json/.txt to this folder")
    p.add_argument("--json", action="store_true", help="Print the fused record as JSON instead of the text report")
    p.add_argument("--log-level", default=None, help="Log level (default from HOLDERMAP_LOG_LEVEL)")
    return p


def main(argv: Optional[List[str]] = None, service: Optional[TokenFusionService] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    configure_logging(args.log_level)

    chain = resolve_chain(args.chain)
    if not chain:
        print(f"Unknown chain: {args.chain}", file=sys.stderr)
        return 2

    address = args.address.strip()
    if not address:
        print("Missing --address", file=sys.stderr)
        return 2

    record = fuse_token(chain, address, service=service)

    if args.json:
        print(json.dumps(record_to_dict(record), indent=2))
    else:
        print(render_report(record), end="")

    if args.out:
        json_path = write_record_json(record, args.out)
        txt_path = write_report_txt(record, args.out)
        logger.info("outputs_written", json=json_path, report=txt_path)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
