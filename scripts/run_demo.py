#!/usr/bin/env python3
"""
Run partner risk queries from the command line.

With no identity arguments every demo user is queried by email.
Receipts are printed as JSON.
"""

import sys
import json
import argparse
import logging
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from chimera_core.config import SystemConfig, load_config
from chimera_core.data import DEMO_USERS
from chimera_core.pipeline import RiskQueryPipeline


logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Query a partner exchange for risk flags")
    parser.add_argument("--config", help="YAML configuration file")
    parser.add_argument("--email")
    parser.add_argument("--phone")
    parser.add_argument("--country")
    parser.add_argument("--document-type")
    parser.add_argument("--document-number")
    parser.add_argument("--internal", action="store_true", help="Include the partner's internal data")
    parser.add_argument("--user", default="cli", help="User ID recorded in the audit log")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose output")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )

    config = load_config(args.config) if args.config else SystemConfig.from_env()
    pipeline = RiskQueryPipeline(config)
    pipeline.set_user_context(args.user)

    query = {
        "email": args.email,
        "phone": args.phone,
        "country": args.country,
        "document_type": args.document_type,
        "document_number": args.document_number,
    }

    if any(query.values()):
        queries = [query]
    else:
        logger.info("No identity given, running %d demo users", len(DEMO_USERS))
        queries = [{"email": email} for email in DEMO_USERS]

    for q in queries:
        receipt = pipeline.query(q)
        if args.internal:
            print(json.dumps(pipeline.view_internal(receipt), indent=2))
        else:
            print(receipt.to_json())

    return 0


if __name__ == "__main__":
    sys.exit(main())
