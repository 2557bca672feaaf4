"""Output path composition for generated model files."""

from ...core.model import Item


def model_file_path(item: Item, model_dir: str = "./model", extension: str = "") -> str:
    """
    Path of an item's generated file.

    Tables live under ``<model_dir>/table/`` and enums under
    ``<model_dir>/enum/``. Pass the extension for the artifact filename,
    leave it empty for the bare path used in name maps and imports.
    """
    if item.kind not in ("table", "enum"):
        raise ValueError(f"Unknown item kind: {item.kind!r}")
    return f"{model_dir}/{item.kind}/{item.name}{extension}"


def import_path(item: Item, model_dir: str = "./model") -> str:
    """Module specifier for importing ``item`` from a file inside ``<model_dir>/<kind>/``."""
    return "../." + model_file_path(item, model_dir)
