"""Generate command implementation."""

from infragraph.config import GeneratorConfig
from infragraph.exceptions import ConfigValidationError
from infragraph.generator import ConfigurationGenerator, write_files
from infragraph.utils.config_loader import load_project
from infragraph.validation import ValidationEngine, has_blocking_errors


def generate_command(args):
    """
    Handle generate subcommand.

    Prints the generated files, or writes them to ``--output``. Writing is
    refused while the project has error diagnostics unless ``--force`` is set.

    Returns:
        Exit code
    """
    try:
        project = load_project(args.project)
    except (FileNotFoundError, ConfigValidationError) as e:
        print(f"❌ Could not load project: {e}")
        return 1

    overrides = {
        "terraform_version": project.metadata.terraform_version,
        "provider_version": project.metadata.provider_version,
    }
    if args.project_id:
        overrides["project_id"] = args.project_id
    if args.region:
        overrides["region"] = args.region
    config = GeneratorConfig(**overrides)

    diagnostics = ValidationEngine().validate_all(project.graph)
    blocked = has_blocking_errors(diagnostics)

    files = ConfigurationGenerator(config=config).generate(project.graph)

    if not args.output:
        if blocked:
            print("# ⚠️ Project has validation errors; output may be incomplete.")
        for generated in files:
            print(f"# ---- {generated.filename} ----")
            print(generated.content)
        return 0

    if blocked and not args.force:
        errors = sum(1 for diag in diagnostics if diag.severity.value == "error")
        print(f"❌ Refusing to write: project has {errors} error(s). Run 'infragraph validate' or use --force.")
        return 1

    for path in write_files(files, args.output):
        print(f"✓ {path}")
    return 0
