import re
from collections.abc import Mapping


def render(template: str, variables: Mapping[str, object]) -> str:
    """Replace every ``{key}`` in ``template`` with ``str(variables[key])``.

    All keys are substituted in one pass over the template, so a value that
    itself contains ``{otherKey}`` is copied through verbatim. Placeholders
    with no matching variable are left as they are.
    """
    if not variables:
        return template

    pattern = re.compile("|".join(re.escape("{" + key + "}") for key in variables))

    def _substitute(match: re.Match[str]) -> str:
        return str(variables[match.group(0)[1:-1]])

    return pattern.sub(_substitute, template)
