"""Row sources: turn CI configuration files into matrix rows."""

from . import github_actions_config, travis_config

__all__ = ["github_actions_config", "travis_config"]
