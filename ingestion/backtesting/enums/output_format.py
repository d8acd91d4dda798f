from enum import Enum


class OutputFormat(str, Enum):
    SIMPLE = "simple"
    JSON = "json"
