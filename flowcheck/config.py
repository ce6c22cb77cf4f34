# flowcheck/config.py
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Optional

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from env; unrecognized values keep the default."""
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    return default


@dataclass(frozen=True)
class ValidatorOptions:
    """
    Optional checks on top of the baseline rules.

    check_config_types:  value-kind checks of node `config` fields against the
                         node type schema, plus the shape of the optional
                         top-level `description` / `config` fields.
    check_duplicate_ids: report nodes that reuse an earlier node's id.
    """

    check_config_types: bool = True
    check_duplicate_ids: bool = False

    @classmethod
    def from_env(cls) -> "ValidatorOptions":
        return cls(
            check_config_types=_env_flag("FLOWCHECK_CHECK_CONFIG_TYPES", True),
            check_duplicate_ids=_env_flag("FLOWCHECK_CHECK_DUPLICATE_IDS", False),
        )

    def override(
        self,
        check_config_types: Optional[bool] = None,
        check_duplicate_ids: Optional[bool] = None,
    ) -> "ValidatorOptions":
        """Copy with the given (non-None) values replaced, e.g. from CLI flags."""
        changes = {}
        if check_config_types is not None:
            changes["check_config_types"] = check_config_types
        if check_duplicate_ids is not None:
            changes["check_duplicate_ids"] = check_duplicate_ids
        return replace(self, **changes)


BASELINE = ValidatorOptions(check_config_types=False, check_duplicate_ids=False)
