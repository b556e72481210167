"""Substitution of environment and preset variables in manifest text."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass

_log = logging.getLogger(__name__)

_ENV_VAR_RE = re.compile(r"\$\{env:(?P<env>.*)\}")
_VAR_RE = re.compile(r"\$\{(?P<var>.*)\}")


class ParseEnvError(Exception):
    """An environment variable referenced by the manifest is not set."""

    def __init__(self, key: str) -> None:
        super().__init__(f"Environment variable is empty: {key}")
        self.key = key


class PreprocessorError(Exception):
    """Preprocessing of the manifest failed."""


@dataclass(frozen=True)
class EnvironmentVariable:
    key: str
    value: str

    @classmethod
    def parse(cls, s: str) -> EnvironmentVariable:
        """Look up ``s`` in the process environment."""
        value = os.environ.get(s)
        if value is None:
            raise ParseEnvError(s)
        return cls(key=s, value=value)


@dataclass(frozen=True)
class Variable:
    key: str
    value: str


class Preprocessor:
    """Replaces ``${env:NAME}`` and ``${NAME}`` references in manifest text."""

    def __init__(self) -> None:
        self.registered_env_vars: list[EnvironmentVariable] = []
        self.yambs_variables: list[Variable] = []

    def with_env_var(self, var: EnvironmentVariable) -> Preprocessor:
        self.registered_env_vars.append(var)
        return self

    def with_var(self, var: Variable) -> Preprocessor:
        self.yambs_variables.append(var)
        return self

    def parse(self, manifest_content: str) -> str:
        """Return the manifest text with its first env and preset references replaced."""
        content = manifest_content

        match = _ENV_VAR_RE.search(content)
        if match:
            try:
                env = EnvironmentVariable.parse(match["env"])
            except ParseEnvError as err:
                raise PreprocessorError("Failed to parse environment variable") from err
            content = content.replace(match[0], env.value)
            if env not in self.registered_env_vars:
                _log.debug("Registered environment variable %s", env.key)
                self.registered_env_vars.append(env)

        match = _VAR_RE.search(content)
        if match:
            name = match["var"]
            preset = next((v for v in self.yambs_variables if v.key == name), None)
            if preset is None:
                raise PreprocessorError(f"No such preset variable exists: {name}")
            content = content.replace(match[0], preset.value)

        return content