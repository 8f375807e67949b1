class AppError:
    """Represents different categories of application errors."""

    def __init__(self, category: str, message: str, rule: str | None = None) -> None:
        # 'parse', 'validation', 'canonicalization', 'unknown_analogue',
        # 'infrastructure', 'internal_error'
        self.category = category
        self.message = message
        self.rule = rule

    def __str__(self) -> str:
        return self.message
