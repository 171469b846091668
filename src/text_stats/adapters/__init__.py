from .summary_sink import MemorySummarySink, StdoutSummarySink
from .text_source import FileTextSource, StaticTextSource

__all__ = ["FileTextSource", "MemorySummarySink", "StaticTextSource", "StdoutSummarySink"]
