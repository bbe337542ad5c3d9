from enum import Enum


class MemoizerKind(str, Enum):
    EAGER = "eager"
    THREAD_SAFE = "thread_safe"
    LAZY = "lazy"
    ASYNC_LAZY = "async_lazy"
    WEAK = "weak"
    ONCE = "once"
