class ValidationError(ValueError):
    """Raised when a menu-layer rule (runes, stat caps, upgrades) is violated."""


def validate(condition, message):
    if not condition:
        raise ValidationError(message)


def safe_validate(fn, *args, **kwargs):
    """
    Run a rule-checked operation and fold its failure into (ok, message).
    Menus use this so a refused purchase re-prompts instead of crashing.
    """
    try:
        fn(*args, **kwargs)
        return True, ""
    except ValidationError as e:
        return False, str(e)
