"""
gitlabctl — list, group, filter and prune GitLab runners and their jobs
across the groups listed in config.json.
"""
import argparse
import logging
import sys
from typing import List, Optional

from gitlabctl.commands.groups import list_groups
from gitlabctl.commands.jobs import list_jobs, list_jobs_by_runner, list_running_jobs
from gitlabctl.commands.reaper import remove_stale
from gitlabctl.commands.runners import list_by_group, list_by_instance
from gitlabctl.core.config import LOG_DIR, LOG_LEVEL, load_settings
from gitlabctl.core.constants import EXIT_CONFIG_ERROR, EXIT_INTERRUPTED, EXIT_OK, VERSION
from gitlabctl.core.exceptions import GitLabCtlError
from gitlabctl.services.gitlab_client import GitLabClient
from gitlabctl.utils.logging_config import setup_logging

logger = logging.getLogger("main")

COMMANDS = {
    "list-by-group": list_by_group,
    "list-by-instance": list_by_instance,
    "remove-stale": remove_stale,
    "list-jobs": list_jobs,
    "list-running-jobs": list_running_jobs,
    "list-jobs-by-runner": list_jobs_by_runner,
    "list-groups": list_groups,
}

EPILOG = """
Examples:
  %(prog)s list-by-group                   all online runners grouped by group id
  %(prog)s list-by-group 'team-a|222'      runners whose group slug or id matches
  %(prog)s list-by-instance i-0abc         runners on a given EC2 instance or IP
  %(prog)s list-running-jobs               running jobs, oldest finish first
  %(prog)s list-jobs 123456                a single job as JSON
  %(prog)s list-jobs-by-runner 42          jobs of one runner
  %(prog)s remove-stale                    delete stale/offline runners (asks first)

NOTE:
  Requires GITLAB_TOKEN in the environment (or .env) and a config file
  (config.json by default) with 'gitlab_api_url' and 'gitlab_group_ids'.
  Patterns are regular expressions matched anywhere in the field.
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gitlabctl",
        description="Manage GitLab runners: list runners and jobs, remove stale runners.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument("--config", help="Path to the config file (default: config.json)")
    parser.add_argument("--tsv", action="store_true", help="Print raw tab-separated rows instead of aligned columns")
    parser.add_argument(
        "--log-level",
        default=LOG_LEVEL,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for messages on stderr (default: %(default)s)",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    p = subparsers.add_parser("list-by-group", help="Runners grouped by group id, or filtered by group slug/id pattern")
    p.add_argument("pattern", nargs="?", help="Regex matched against group_slug or group_id")

    p = subparsers.add_parser("list-by-instance", help="Runners grouped by IP, or filtered by instance/IP pattern")
    p.add_argument("pattern", nargs="?", help="Regex matched against instance_id or ip_address")

    subparsers.add_parser("remove-stale", help="Remove all stale/offline runners of the configured groups")

    p = subparsers.add_parser("list-jobs", help="Jobs of all runners, or a single job by id")
    p.add_argument("job_id", nargs="?", help="Job id to show")

    p = subparsers.add_parser("list-running-jobs", help="Running jobs of all runners, or a single job by id")
    p.add_argument("job_id", nargs="?", help="Job id to show")

    p = subparsers.add_parser("list-jobs-by-runner", help="Jobs of one runner")
    p.add_argument("runner_id", nargs="?", help="Runner id (required)")

    p = subparsers.add_parser("list-groups", help="Groups visible to the token")
    p.add_argument("search", nargs="?", help="Name substring to search for")

    subparsers.add_parser("help", help="Show this help")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(level=getattr(logging, args.log_level, logging.INFO), log_dir=LOG_DIR)

    if args.command is None:
        parser.print_help(sys.stderr)
        return EXIT_CONFIG_ERROR
    if args.command == "help":
        parser.print_help()
        return EXIT_OK

    try:
        settings = load_settings(args.config)
        with GitLabClient.from_settings(settings) as client:
            return COMMANDS[args.command](client, settings, args)
    except KeyboardInterrupt:
        logger.warning("Interrupted.")
        return EXIT_INTERRUPTED
    except GitLabCtlError as e:
        logger.error("%s", e)
        return e.exit_code


if __name__ == "__main__":
    sys.exit(main())
