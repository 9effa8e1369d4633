"""
Load the configured form schema and print each step with its rules.
Run: python -m scripts.check_schema [path/to/udyam_steps.json]  (from backend/)

Exits with status 1 when the schema cannot be loaded.
"""

import sys

from udyam_intake.core.config import settings
from udyam_intake.forms import ConfigurationError, SchemaProvider


def describe(provider: SchemaProvider) -> int:
    """Print a summary of the schema.  Returns the process exit code."""
    try:
        form = provider.get()
    except ConfigurationError as exc:
        print(f"  Schema error: {exc.message}")
        for key, value in exc.details.items():
            print(f"    {key}: {value}")
        return 1

    document = form.document
    print(f"{document.title} ({len(document.steps)} steps)")
    for index, step in enumerate(document.steps, start=1):
        print(f"  Step {index}: {step.id} ({step.title})")
        for field in step.fields:
            rules = field.validation.model_dump(by_alias=True, exclude_defaults=True) if field.validation else {}
            print(f"    {field.id:<20} {field.type:<9} {rules or '-'}")
    return 0


if __name__ == "__main__":
    candidates = sys.argv[1:] or settings.schema_candidates
    sys.exit(describe(SchemaProvider(candidates)))
