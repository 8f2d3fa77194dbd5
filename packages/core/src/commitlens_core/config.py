import os
from pathlib import Path
from typing import Optional

import yaml

DEFAULT_CONFIG: dict = {
    "model": "openai",
    "default_owner": None,  # prefixed to bare repository names, e.g. "runtime-core" -> "acme/runtime-core"
    "default_branch": "master",
    "commit_count": 5,
    "file_commit_count": 5,
    "review_bots": ["copilot"],  # login substrings that mark an automated reviewer
}


def load_config(config_path: str = ".commitlens.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .commitlens.yml in the current directory
      3. CLI argument overrides
    """
    config = {**DEFAULT_CONFIG, "review_bots": list(DEFAULT_CONFIG["review_bots"])}

    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    # A single bot may be written as a scalar: "review_bots: copilot".
    if isinstance(config.get("review_bots"), str):
        config["review_bots"] = [config["review_bots"]]

    # Resolve credentials from environment variables
    config["github_token"] = os.environ.get("GITHUB_TOKEN")
    config["openai_api_key"] = os.environ.get("OPENAI_API_KEY")
    config["anthropic_api_key"] = os.environ.get("ANTHROPIC_API_KEY")

    return config
