from .summary_sink import SummarySink
from .text_source import TextSource

# Public port exports keep wiring explicit at composition time.
__all__ = ["SummarySink", "TextSource"]
