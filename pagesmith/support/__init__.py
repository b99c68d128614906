"""Text transformation and ordering utilities used by the page builder."""

from .highlight import CodeHighlighter
from .markdown_transformer import MarkdownToHtmlTransformer
from .topic_sorter import sort_topics
from .url_transformer import TopicUrlTransformer, UrlTransformer

__all__ = [
    "CodeHighlighter",
    "MarkdownToHtmlTransformer",
    "TopicUrlTransformer",
    "UrlTransformer",
    "sort_topics",
]
