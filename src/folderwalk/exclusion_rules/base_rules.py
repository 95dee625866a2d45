from abc import ABC, abstractmethod
from typing import Sequence, Union

from folderwalk.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for file/directory exclusion rules.

    Concrete rules decide whether an entry met during the walk is pruned. Pruning is
    hard: an excluded directory is never listed, so nothing beneath it is ever seen.
    File loading and individual rule addition are optional capabilities that depend
    on the rule type.

    Paths handed to ``exclude`` are relative to the walk root and use forward slashes.
    Directories are additionally offered with a trailing slash so that directory-only
    patterns (``build/``) can match them.

    Example:
        >>> from folderwalk.exclusion_rules.name_rules import NameExclusionRules
        >>> rules = NameExclusionRules({"node_modules"})
        >>> rules.exclude("web/node_modules")
        True
        >>> rules.exclude("web/src")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded based on the loaded rules.

        Args:
            path (str): Root-relative, forward-slash path of the entry to check.

        Returns:
            bool: True if the path should be excluded, False if it should be included.
        """
        pass

    def has_rules(self) -> bool:
        """Report whether any rule is configured. Rule types without state assume they do."""
        return True

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Rule types that don't support file operations use this default implementation.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
