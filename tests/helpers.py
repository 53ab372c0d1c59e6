import os
from pathlib import Path
from unittest.mock import patch


def clean_env(**overrides):
    """Patches os.environ without any PYGLEAN_* variable, plus `overrides`."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("PYGLEAN_")}
    env.update(overrides)
    return patch.dict(os.environ, env, clear=True)


def write_config(directory, content, name="pyglean.toml"):
    path = Path(directory) / name
    path.write_text(content, encoding="utf-8")
    return path
