"""Native callables installed into the root environment."""

from malt.builtin.env_builtin import default_env, register

__all__ = ["default_env", "register"]
