import os
import re
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from infragraph.config import ProjectData, build_project_data
from infragraph.exceptions import ConfigValidationError
from infragraph.models import Graph
from infragraph.utils.logging import get_logger

# Pattern to match ${VAR} or ${env:VAR}
# Captures the variable name in group 1
ENV_PATTERN = re.compile(r"\$\{(?:env:)?([A-Za-z0-9_]+)\}")


def load_yaml_with_env(path: str) -> Dict[str, Any]:
    """Load a YAML (or JSON) file with environment variable substitution.

    Args:
        path: Path to the file

    Returns:
        Parsed dictionary

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If environment variable is missing
        yaml.YAMLError: If YAML parsing fails
    """
    logger = get_logger()
    logger.debug("Loading project file", path=path)

    if not os.path.exists(path):
        logger.error("Project file not found", path=path)
        raise FileNotFoundError(f"Project file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        content = f.read()

    env_vars_found = []

    def replace_env(match):
        var_name = match.group(1)
        env_vars_found.append(var_name)
        value = os.environ.get(var_name)
        if value is None:
            logger.error("Missing required environment variable", variable=var_name, file=path)
            raise ValueError(f"Missing environment variable: {var_name}")
        return value

    substituted_content = ENV_PATTERN.sub(replace_env, content)

    if env_vars_found:
        logger.debug(
            "Environment variable substitution complete",
            variables_substituted=env_vars_found,
            count=len(env_vars_found),
        )

    data = yaml.safe_load(substituted_content) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top level of {path}")

    logger.debug("Project file parsed", top_level_keys=list(data.keys()))
    return data


def load_project(path: str) -> ProjectData:
    """Load a project envelope, or a bare ``{nodes, edges}`` graph, from disk.

    Raises:
        FileNotFoundError: If file does not exist
        ConfigValidationError: If the content is not a valid project or graph
    """
    try:
        data = load_yaml_with_env(path)
    except (ValueError, yaml.YAMLError) as e:
        line = None
        mark = getattr(e, "problem_mark", None)
        if mark is not None:
            line = mark.line + 1
        raise ConfigValidationError(str(e), file=path, line=line) from e

    try:
        if "graph" in data:
            return ProjectData.model_validate(data)
        graph = Graph.model_validate(data)
    except ValidationError as e:
        raise ConfigValidationError(str(e), file=path) from e

    name = os.path.splitext(os.path.basename(path))[0]
    return build_project_data(graph, name)
