import json
import logging
from pathlib import Path

import click
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .pipeline import IRError, IRGeneratorConfig, PipelineGenerator, spec_to_dict

logger = logging.getLogger(__name__)

_yaml = YAML(typ="safe")


def load_document(path: str):
    """Load a JSON or YAML file, chosen by extension."""
    file_path = Path(path)
    text = file_path.read_text(encoding="utf-8")
    if file_path.suffix.lower() == ".json":
        return json.loads(text)
    return _yaml.load(text)


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--extension-name", "-e", default=None, type=str, help="Metadata key holding per-node overrides")
@click.option(
    "--log-level",
    default="WARNING",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def openapi_to_ir(config, extension_name, log_level, path, output):
    logging.basicConfig(level=log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    try:
        document = load_document(path)
        config_dict = load_document(config) if config is not None else None
    except (ValueError, YAMLError) as e:
        raise click.ClickException(f"cannot decode input: {e}") from e

    if config_dict is not None:
        if not isinstance(config_dict, dict):
            raise click.ClickException("config must be a mapping")
        config = IRGeneratorConfig.from_dict(config_dict)
    else:
        config = IRGeneratorConfig()

    # Command line flag overrides the config file
    if extension_name:
        config.resolver.extension_name = extension_name

    try:
        spec = PipelineGenerator(document, config).generate()
    except IRError as e:
        raise click.ClickException(str(e)) from e

    # YAML scalars such as dates have no JSON form, they are written as strings
    text = json.dumps(spec_to_dict(spec), indent=2, default=str)

    with open(output, "w") as f:
        f.write(text + "\n")

    logger.info("Wrote %s", output)
