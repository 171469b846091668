from .char_counter import CharCounter
from .file_reader import FileReader
from .publisher import Publisher
from .result_aggregator import ResultAggregator
from .text_sanitizer import TextSanitizer
from .word_counter import WordCounter

__all__ = [
    "CharCounter",
    "FileReader",
    "Publisher",
    "ResultAggregator",
    "TextSanitizer",
    "WordCounter",
]
