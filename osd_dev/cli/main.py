import logging
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass

from osd_dev.cli.exitcodes import exit_code_for_error
from osd_dev.compose.runner import DockerComposeRunner
from osd_dev.core.config import EnvironmentPaths
from osd_dev.core.constants import DEFAULT_OSD_VERSION, ENV_LOG_LEVEL, Action
from osd_dev.core.errors import DevEnvError, ValidationError
from osd_dev.core.messages import msg_action_required
from osd_dev.environment.configurator import EnvironmentConfigurator
from osd_dev.environment.writer import MappingEnvironmentWriter
from osd_dev.resolve.arguments import DefaultArgumentParser
from osd_dev.resolve.repositories import RepositoryResolver, required_repositories

logger = logging.getLogger("osd_dev")


@dataclass(frozen=True)
class ResolvedRun:
    """Everything needed to invoke Compose."""

    action: Action
    profile: str
    compose_file: str
    environment: Mapping[str, str]  # full child environment (ambient + exported)
    exported: Mapping[str, str]  # only the variables set by osd-dev


def configure_logging(environ: Mapping[str, str]) -> None:
    level_name = (environ.get(ENV_LOG_LEVEL) or "INFO").upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    # the CLI owns the package logger; re-bind to the current stderr on every run
    logger.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level)


def resolve_run(argv: Sequence[str], environ: Mapping[str, str]) -> ResolvedRun:
    """
    Full resolution pass: parse -> repositories -> environment.

    All-or-nothing: a ValidationError / ConfigurationError from any stage
    propagates before anything is handed to Compose.
    """
    env_paths = EnvironmentPaths.from_environ(environ)
    config = DefaultArgumentParser().parse(argv, env_paths)
    if config.action is None:
        raise ValidationError(msg_action_required())

    repositories = RepositoryResolver().resolve_all(required_repositories(config), config, env_paths)

    writer = MappingEnvironmentWriter(environ)
    configurator = EnvironmentConfigurator(writer)
    configurator.initialize_base_environment(config)
    configurator.set_version_derived_environment(config.osd_version or DEFAULT_OSD_VERSION, env_paths)
    profile = configurator.configure_mode_and_security(config)
    configurator.configure_optional_features(config)
    configurator.export_repositories(repositories)

    return ResolvedRun(
        action=config.action,
        profile=profile,
        compose_file=env_paths.compose_file,
        environment=writer.to_dict(),
        exported=writer.written,
    )


def main(argv: Sequence[str] | None = None, environ: Mapping[str, str] | None = None) -> int:
    args = list(sys.argv[1:] if argv is None else argv)
    env = dict(os.environ if environ is None else environ)
    configure_logging(env)

    try:
        run = resolve_run(args, env)
    except DevEnvError as e:
        print(f"osd-dev: error: {e}", file=sys.stderr)
        return exit_code_for_error(e)

    logger.info("Profile: %s", run.profile)
    for name, value in sorted(run.exported.items()):
        logger.debug("%s=%s", name, value)
    return DockerComposeRunner(compose_file=run.compose_file).run(run.action, run.profile, run.environment)
