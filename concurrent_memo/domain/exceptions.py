class MemoizationError(Exception):
    pass


class UnreferenceableValueError(MemoizationError, TypeError):
    def __init__(self, key: object, value: object) -> None:
        super().__init__(
            f"cannot weakly reference value of type {type(value).__name__!r} "
            f"computed for key {key!r}"
        )
        self.key = key
        self.value_type = type(value)


class ConfigError(MemoizationError, ValueError):
    pass
