"""CLI entrypoint.

Parses arguments, loads settings and credentials, then hands control to one
workflow. Exit codes:
- 0 success
- 1 a fatal step failed (already reported) or an unexpected error occurred
- 2 configuration or usage error
- 3 finished, but one or more non-fatal steps failed
"""

from __future__ import annotations

import argparse
import logging
import sys
from dataclasses import dataclass
from pathlib import Path

import click
from pydantic import ValidationError

from github_repo_automator import __version__
from github_repo_automator.orchestrator.config import AutomatorSettings
from github_repo_automator.orchestrator.credentials import Credentials, CredentialStore
from github_repo_automator.orchestrator.errors import (
    AutomatorError,
    CredentialsError,
    FatalStepError,
)
from github_repo_automator.orchestrator.git.repository import GitRepository
from github_repo_automator.orchestrator.github.client import GitHubClient
from github_repo_automator.orchestrator.logging import configure_logging
from github_repo_automator.orchestrator.prompt import Prompter
from github_repo_automator.orchestrator.report import Reporter
from github_repo_automator.orchestrator.scaffold.workflows import WORKFLOW_KINDS
from github_repo_automator.orchestrator.workflow import (
    BranchManager,
    Configurator,
    InitRequest,
    IssueCreator,
    PullRequestCreator,
    RepositoryInfoResolver,
    RepositoryInitializer,
    RepositorySynchronizer,
    Scaffolder,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_USAGE = 2
EXIT_PARTIAL = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ghauto",
        description="Automates pushing local projects to GitHub",
    )
    parser.add_argument("--version", action="version", version=f"ghauto {__version__}")
    parser.add_argument(
        "-C",
        "--directory",
        default=".",
        help="Run as if started in this directory (default: current directory)",
    )
    parser.add_argument(
        "--no-input",
        action="store_true",
        help="Never prompt; use defaults and fail when a required value is missing",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    init = subparsers.add_parser(
        "init", help="Initialize a git repository, create it on GitHub and push"
    )
    init.add_argument("-n", "--name", default=None, help="Repository name")
    init.add_argument(
        "-d", "--desc", dest="description", default=None, help="Repository description"
    )
    init.add_argument("-p", "--private", action="store_true", help="Make repository private")
    init.add_argument("-g", "--gitignore", default=None, help="Add a .gitignore template")
    init.add_argument(
        "-l", "--license", default=None, help="Add a license (e.g., mit, apache-2.0)"
    )
    init.add_argument(
        "-w",
        "--workflow",
        choices=WORKFLOW_KINDS,
        default=None,
        help="Add a GitHub Actions workflow",
    )

    push = subparsers.add_parser("push", help="Commit changes and push to GitHub")
    push.add_argument("-m", "--message", default=None, help="Commit message")

    config = subparsers.add_parser("config", help="Configure GitHub credentials")
    config.add_argument("-t", "--token", default=None, help="GitHub Personal Access Token")
    config.add_argument("-u", "--username", default=None, help="GitHub username")
    config.add_argument("--default-branch", default=None, help="Default branch name")
    config.add_argument(
        "--default-license",
        default=None,
        help="License used by init when --license is omitted",
    )

    branch = subparsers.add_parser("branch", help="Manage git branches")
    branch_commands = branch.add_subparsers(dest="branch_command", required=True)
    branch_create = branch_commands.add_parser("create", help="Create a new branch")
    branch_create.add_argument("name", help="Branch name")
    branch_create.add_argument(
        "-c", "--checkout", action="store_true", help="Checkout the new branch"
    )
    branch_commands.add_parser("list", help="List branches")
    branch_switch = branch_commands.add_parser("switch", help="Switch to a branch")
    branch_switch.add_argument("name", help="Branch name")

    gitignore = subparsers.add_parser("gitignore", help="Set up a .gitignore file")
    gitignore.add_argument(
        "template", nargs="?", default=None, help="Template name (e.g., Rust, Python, Node)"
    )

    issue = subparsers.add_parser("issue", help="Create a GitHub issue")
    issue.add_argument("-t", "--title", default=None, help="Issue title")
    issue.add_argument("-b", "--body", default=None, help="Issue body")
    issue.add_argument(
        "-l",
        "--label",
        dest="labels",
        action="append",
        default=None,
        help="Issue label (repeatable)",
    )

    pr = subparsers.add_parser("pr", help="Create a pull request")
    pr.add_argument("-t", "--title", default=None, help="PR title")
    pr.add_argument("-b", "--body", default=None, help="PR description")
    pr.add_argument("--base", default=None, help="Base branch")
    pr.add_argument("--head", default=None, help="Head branch (defaults to the current branch)")

    workflow = subparsers.add_parser("workflow", help="Set up GitHub Actions workflow")
    workflow.add_argument(
        "type", nargs="?", choices=WORKFLOW_KINDS, default=None, help="Workflow type"
    )

    return parser


@dataclass(frozen=True, slots=True)
class _Runtime:
    settings: AutomatorSettings
    directory: Path
    prompter: Prompter
    reporter: Reporter
    store: CredentialStore
    git: GitRepository

    def github(self, credentials: Credentials) -> GitHubClient:
        return GitHubClient(token=credentials.token, base_url=self.settings.github_api_url)

    def load_credentials(self) -> Credentials | None:
        try:
            return self.store.load()
        except CredentialsError as e:
            self.reporter.notice(f"Ignoring unreadable configuration: {e}")
            return None

    def branch_default(self, credentials: Credentials | None) -> str:
        if credentials is not None and credentials.default_branch:
            return credentials.default_branch
        return self.settings.default_branch


def _run_command(args: argparse.Namespace, rt: _Runtime) -> int:
    if args.command == "config":
        Configurator(
            store=rt.store,
            prompter=rt.prompter,
            reporter=rt.reporter,
            fallback_branch=rt.settings.default_branch,
        ).run(
            token=args.token,
            username=args.username,
            default_branch=args.default_branch,
            default_license=args.default_license,
        )
        return EXIT_OK

    if args.command == "workflow":
        credentials = rt.load_credentials()
        Scaffolder(
            directory=rt.directory,
            github_factory=rt.github,
            prompter=rt.prompter,
            reporter=rt.reporter,
        ).workflow(args.type, branch=rt.branch_default(credentials))
        return EXIT_OK

    if args.command == "gitignore":
        Scaffolder(
            directory=rt.directory,
            github_factory=rt.github,
            prompter=rt.prompter,
            reporter=rt.reporter,
        ).gitignore(rt.load_credentials(), args.template)
        return EXIT_OK

    if args.command == "init":
        credentials = rt.load_credentials()
        descriptor = RepositoryInfoResolver(rt.prompter).resolve(
            directory=rt.directory,
            name=args.name,
            description=args.description,
            private=args.private,
            license=args.license,
            credentials=credentials,
        )
        result = RepositoryInitializer(
            git=rt.git,
            github_factory=rt.github,
            reporter=rt.reporter,
            fallback_branch=rt.settings.default_branch,
        ).run(
            InitRequest(
                descriptor=descriptor,
                gitignore_template=args.gitignore,
                workflow_kind=args.workflow,
            ),
            credentials,
        )
        return EXIT_OK if result.ok else EXIT_PARTIAL

    if args.command == "push":
        sync = RepositorySynchronizer(git=rt.git, prompter=rt.prompter, reporter=rt.reporter).run(
            args.message
        )
        return EXIT_PARTIAL if sync.soft_failures else EXIT_OK

    if args.command == "branch":
        branches = BranchManager(git=rt.git, reporter=rt.reporter)
        if args.branch_command == "create":
            failures = branches.create(args.name, checkout=args.checkout)
            return EXIT_PARTIAL if failures else EXIT_OK
        if args.branch_command == "list":
            branches.list()
            return EXIT_OK
        if args.branch_command == "switch":
            branches.switch(args.name)
            return EXIT_OK

    if args.command == "issue":
        IssueCreator(
            git=rt.git, github_factory=rt.github, prompter=rt.prompter, reporter=rt.reporter
        ).create(rt.load_credentials(), title=args.title, body=args.body, labels=args.labels)
        return EXIT_OK

    if args.command == "pr":
        PullRequestCreator(
            git=rt.git,
            github_factory=rt.github,
            prompter=rt.prompter,
            reporter=rt.reporter,
            default_base=rt.settings.default_branch,
        ).create(
            rt.load_credentials(),
            title=args.title,
            body=args.body,
            base=args.base,
            head=args.head,
        )
        return EXIT_OK

    logger.error("Unknown command", extra={"command": args.command})
    return EXIT_USAGE


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = AutomatorSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your environment or .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return EXIT_USAGE

    configure_logging(settings.log_level)

    directory = Path(args.directory).expanduser().resolve()
    if not directory.is_dir():
        print(f"Not a directory: {directory}", file=sys.stderr)
        return EXIT_USAGE

    rt = _Runtime(
        settings=settings,
        directory=directory,
        prompter=Prompter(interactive=not args.no_input),
        reporter=Reporter(),
        store=CredentialStore(settings.credentials_path),
        git=GitRepository(directory, program=settings.git_binary),
    )

    try:
        return _run_command(args, rt)

    except FatalStepError as e:
        # The reporter already printed the failure.
        logger.debug("Fatal step", extra={"step": e.step})
        return EXIT_FAILED

    except AutomatorError as e:
        click.secho(f"Error: {e}", fg="red", err=True)
        return EXIT_FAILED

    except Exception:
        logger.exception("Command failed")
        return EXIT_FAILED


if __name__ == "__main__":
    raise SystemExit(main())
