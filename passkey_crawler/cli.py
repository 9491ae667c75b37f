import sys
import json
import logging
from datetime import datetime
from typing import Optional
from argparse import ArgumentParser, ArgumentDefaultsHelpFormatter, Namespace
from pymongo import MongoClient
from passkey_crawler.config.defaults import load_config
from passkey_crawler.config.logging import setup_logging
from passkey_crawler.modules.analyzers import PasskeyAnalyzer
from passkey_crawler.modules.helper.candidates import CandidateResolver
from passkey_crawler.modules.batch import BatchOrchestrator, crawl_web
from passkey_crawler.modules.report import format_report, format_summary
from passkey_crawler.modules.sinks import LinkSink, MongoLinkSink, ApiLinkSink


logger = logging.getLogger(__name__)


def parser() -> ArgumentParser:
    parser = ArgumentParser(
        description="passkey crawler cli",
        formatter_class=ArgumentDefaultsHelpFormatter
    )
    parser.add_argument(
        "--log-level",
        help="log level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default="INFO"
    )
    parser.add_argument("--config", help="json config file merged onto the defaults", type=str, default=None, metavar="<str>")
    parser.add_argument("--headed", help="show the browser window", action="store_true")
    commands = parser.add_subparsers(dest="command", required=True)

    p = commands.add_parser("detect", help="detect passkey support of a single url", formatter_class=ArgumentDefaultsHelpFormatter)
    p.add_argument("--url", help="site url", type=str, required=True, metavar="<str>")
    p.add_argument("--output", "-o", help="output json file", type=str, default=None, metavar="<str>")

    p = commands.add_parser("crawl", help="resolve a query and list passkey-enabled sites", formatter_class=ArgumentDefaultsHelpFormatter)
    p.add_argument("--query", help="query or domain", type=str, required=True, metavar="<str>")
    p.add_argument("--multiple", help="also try raw url variants of the query", action="store_true")

    p = commands.add_parser("batch", help="detect passkey support for every site in a file", formatter_class=ArgumentDefaultsHelpFormatter)
    p.add_argument("--sites", help="file with one domain or query per line", type=str, required=True, metavar="<str>")
    p.add_argument("--out", help="text report file", type=str, default="result.txt", metavar="<str>")
    p.add_argument("--json", help="json report file", type=str, default=None, metavar="<str>")
    p.add_argument("--multiple", help="also try raw url variants of each query", action="store_true")
    p.add_argument("--mongo-uri", help="store positive sites in mongodb", type=str, default=None, metavar="<str>")
    p.add_argument("--mongo-database", help="mongodb database", type=str, default="passkeys", metavar="<str>")
    p.add_argument("--links-api", help="store positive sites via the links api at this base url", type=str, default=None, metavar="<str>")
    p.add_argument("--links-token", help="bearer token for the links api", type=str, default="", metavar="<str>")

    return parser


def build_config(args: Namespace) -> dict:
    overrides = {}
    if args.headed:
        overrides.setdefault("browser_config", {})["headless"] = False
    if getattr(args, "multiple", False):
        overrides.setdefault("resolver_config", {})["multiple_variants"] = True
    return load_config(args.config, overrides)


def build_sink(args: Namespace) -> Optional[LinkSink]:
    if getattr(args, "mongo_uri", None):
        logger.info(f"Storing positive sites in mongodb database: {args.mongo_database}")
        return MongoLinkSink(MongoClient(args.mongo_uri)[args.mongo_database]["links"])
    if getattr(args, "links_api", None):
        logger.info(f"Storing positive sites via links api: {args.links_api}")
        return ApiLinkSink(args.links_api, args.links_token)
    return None


def detect(args: Namespace, config: dict) -> int:
    verdict = PasskeyAnalyzer(config).detect(args.url)
    out = json.dumps(verdict.to_dict(), indent=4)
    if args.output:
        with open(args.output, "w") as f:
            f.write(out)
        logger.info(f"Verdict written to: {args.output}")
    else:
        print(out)
    return 0


def crawl(args: Namespace, config: dict) -> int:
    orchestrator = BatchOrchestrator(PasskeyAnalyzer(config), CandidateResolver.from_config(config))
    records = crawl_web(args.query, orchestrator)
    print(json.dumps(records, indent=4))
    return 0


def batch(args: Namespace, config: dict) -> int:
    logger.info(f"Loading sites: {args.sites}")
    with open(args.sites, "r") as f:
        sites = f.read().splitlines()

    orchestrator = BatchOrchestrator(
        PasskeyAnalyzer(config), CandidateResolver.from_config(config), build_sink(args)
    )
    report = orchestrator.run(sites)

    logger.info(f"Saving report: {args.out}")
    with open(args.out, "w", encoding="utf-8") as f:
        f.write(format_report(report, datetime.now()))
    if args.json:
        logger.info(f"Saving json report: {args.json}")
        with open(args.json, "w") as f:
            json.dump(report.to_dict(), f, indent=4)

    print("\n".join(["SUMMARY", *format_summary(report)]))
    return 0


COMMANDS = {
    "detect": detect,
    "crawl": crawl,
    "batch": batch
}


def main(argv=None) -> int:
    args = parser().parse_args(argv)

    setup_logging(args.log_level)

    config = build_config(args)
    logger.info(f"Starting {args.command}")
    return COMMANDS[args.command](args, config)


if __name__ == "__main__":
    sys.exit(main())
