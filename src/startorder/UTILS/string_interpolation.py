"""
Utilities for Compose-style variable interpolation.
Supports $$, $VAR, ${VAR}, ${VAR:-default}, ${VAR-default}, ${VAR:+alt} and ${VAR+alt}.
"""
import re
from typing import Dict, List

_NAME = r'[A-Za-z_][A-Za-z0-9_]*'
_PATTERN = re.compile(
    r'\$(?:(?P<escaped>\$)'
    r'|\{(?P<braced>' + _NAME + r')(?:(?P<modifier>:?[-+])(?P<alternative>[^}]*))?\}'
    r'|(?P<named>' + _NAME + r'))'
)

class EnvironmentInterpolator:
    """
    Replaces variable references in a string with values from a context.

    Unset variables without a default resolve to an empty string, as Docker
    Compose does; their names are collected in ``missing``.
    """
    def __init__(self, context: Dict[str, str]):
        """
        :param context: Variable names and their values.
        """
        self.context = context
        self.missing: List[str] = []

    def interpolate(self, template: str) -> str:
        """
        Interpolates variables in the template string.

        :param template: Text with variable references.
        :return: The text with every reference replaced.
        """
        return _PATTERN.sub(self._replace, template)

    def _replace(self, match: 're.Match') -> str:
        if match.group('escaped'):
            return '$'

        name = match.group('braced') or match.group('named')
        modifier = match.group('modifier')
        alternative = match.group('alternative')
        value = self.context.get(name)

        if modifier == ':-':
            return value if value else alternative
        if modifier == '-':
            return value if value is not None else alternative
        if modifier == ':+':
            return alternative if value else ''
        if modifier == '+':
            return alternative if value is not None else ''

        if value is None:
            if name not in self.missing:
                self.missing.append(name)
            return ''
        return value
