"""Deep merge logic for configuration files."""


def deep_merge(base: dict, override: dict) -> dict:
    """
    Deep merge two dictionaries. Override wins on conflicts.

    Key order of base is kept; keys only in override are appended, so
    bundle order follows the base file.

    Example:
        base = {"vault": {"url": "http://localhost:8200", "verify": True}}
        override = {"vault": {"verify": False}}
        result = {"vault": {"url": "http://localhost:8200", "verify": False}}
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result
