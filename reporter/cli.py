"""Command line entry point: reporter <command> <source> [flags]."""

import argparse
import logging
import sys
from typing import List, Optional

from reporter.application.authors import resolve_author
from reporter.application.contributors import ContributorAggregator
from reporter.application.render import render_contributors, render_merged, render_status
from reporter.application.report_service import ReportService
from reporter.application.targets import resolve_targets, split_source
from reporter.config import Settings
from reporter.domain.date_range import PERIODS, parse_range
from reporter.domain.errors import ReporterError
from reporter.infrastructure.credentials import resolve_token
from reporter.infrastructure.github_client import GitHubClient

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _add_period(p: argparse.ArgumentParser):
    p.add_argument("--period", "-p", default="daily",
                   help=f"Report period: either {' or '.join(PERIODS)}")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="reporter",
                                description="GitHub report generator and statistics aggregator")
    p.add_argument("--token", default="", help="GitHub API token")
    p.add_argument("--verbose", action="store_true", help="Verbose output")
    sub = p.add_subparsers(dest="command", metavar="<command>")
    sub.required = True

    rep = sub.add_parser("report", aliases=["rep"], help="Generate report for period")
    rep.add_argument("source", help="Organization or owner/repository")
    _add_period(rep)
    rep.add_argument("--date", default="", help="Date of report (currently ignored)")
    rep.add_argument("--author", default="", help="Filter by author")
    rep.add_argument("--authors", action="store_true", help="Hide PR authors")
    rep.set_defaults(handler=cmd_report)

    contr = sub.add_parser("contrib", aliases=["contr"],
                           help="Generate report for contributors statistics")
    contr.add_argument("source", help="Organization or owner/repository")
    _add_period(contr)
    contr.add_argument("--author", default="", help="Filter by author")
    contr.set_defaults(handler=cmd_contrib)

    stat = sub.add_parser("status", aliases=["stat", "stats"], help="Show status of project")
    stat.add_argument("source", help="Organization or owner/repository")
    stat.add_argument("--author", default="", help="Filter PR by author (submitter)")
    stat.set_defaults(handler=cmd_status)
    return p


def cmd_report(args: argparse.Namespace, client: GitHubClient) -> int:
    date_range = parse_range(args.period)
    if args.date:
        logger.info(f"--date {args.date} is not supported yet, using {args.period} range")
    repos = resolve_targets(client, args.source)
    author = resolve_author(client, args.author)
    service = ReportService(client)
    render_merged(service.merged_pull_requests(repos, author, date_range),
                  show_authors=not args.authors)
    return 0


def cmd_status(args: argparse.Namespace, client: GitHubClient) -> int:
    print("Active pull requests:")
    repos = resolve_targets(client, args.source)
    author = resolve_author(client, args.author)
    service = ReportService(client)
    render_status(service.open_pull_requests(repos, author))
    return 0


def cmd_contrib(args: argparse.Namespace, client: GitHubClient) -> int:
    date_range = parse_range(args.period)
    print("Contributors statistics:")
    repos = resolve_targets(client, args.source)
    author = resolve_author(client, args.author)

    def show(kind: str, login: str, url: str):
        if args.verbose or author:
            labels = {"review": "review", "pull": "PR", "issue": "Issue"}
            print(f"{labels[kind]} by {login}: {url}")

    aggregator = ContributorAggregator(client, date_range, author, on_contribution=show)
    org = split_source(args.source)[0]
    stats = aggregator.collect(repos, org)
    render_contributors(stats)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Run a reporter command. Returns the process exit code."""
    if argv is None:
        argv = sys.argv[1:]

    args = _build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
        logging.basicConfig(
            level=logging.INFO if args.verbose else settings.log_level,
            format=LOG_FORMAT,
            stream=sys.stderr,
        )
        token = resolve_token(args.token)
        with GitHubClient(token, settings) as client:
            return args.handler(args, client)
    except ReporterError as e:
        # No-op when logging was already configured above
        logging.basicConfig(format=LOG_FORMAT, stream=sys.stderr)
        logger.error(f"{args.command} failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
