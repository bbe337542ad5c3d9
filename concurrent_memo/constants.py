class Defaults:
    VERBOSITY = 0
    STRONG_FALLBACK = True
    KEY_REPR_LIMIT = 60
    CONFIG_FILE = "concurrent_memo.toml"


class Constraints:
    MAX_VERBOSITY = 2
    MIN_KEY_REPR_LIMIT = 8


class EnvVars:
    VERBOSITY = "MEMO_VERBOSITY"
    STRONG_FALLBACK = "MEMO_STRONG_FALLBACK"
    KEY_REPR_LIMIT = "MEMO_KEY_REPR_LIMIT"


TRUTHY_VALUES = frozenset({"1", "true", "yes", "on"})
FALSY_VALUES = frozenset({"0", "false", "no", "off", ""})
