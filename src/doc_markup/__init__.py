"""Documentation markup processor extracting abstracts, discussions and tags from doc comments."""

from .comment import join_comment_pieces, strip_comment_markers
from .components import (
    AbstractSection,
    DiscussionSection,
    HTTPBody,
    HTTPParameter,
    HTTPResponse,
    Parameter,
    Return,
    SimpleTag,
    TaggedComponents,
    Throw,
)
from .documentation import DocumentationMarkup, DocumentationMarkupParser
from .nodes import MarkupNode, NodeType, SourcePosition, SourceRange, render
from .parser import MarkupParser, ParseResult
from .processor import DocumentationProcessor
from .scanner import DirectoryScanner, ScannerConfig
from .section_splitter import ParseSection, SectionSplitter, SplitResult
from .tag_extractor import ExtractedTag, extract_outline, extract_tag
from .tag_grammar import KnownTag, TagKind, classify, split_name_and_content
from .tag_rewriter import RewriteResult, TaggedComponentsBuilder, TagRewriter

__all__ = [
    "AbstractSection",
    "DiscussionSection",
    "HTTPBody",
    "HTTPParameter",
    "HTTPResponse",
    "Parameter",
    "Return",
    "SimpleTag",
    "TaggedComponents",
    "Throw",
    "DocumentationMarkup",
    "DocumentationMarkupParser",
    "MarkupNode",
    "NodeType",
    "SourcePosition",
    "SourceRange",
    "render",
    "MarkupParser",
    "ParseResult",
    "DocumentationProcessor",
    "DirectoryScanner",
    "ScannerConfig",
    "ParseSection",
    "SectionSplitter",
    "SplitResult",
    "ExtractedTag",
    "extract_outline",
    "extract_tag",
    "KnownTag",
    "TagKind",
    "classify",
    "split_name_and_content",
    "RewriteResult",
    "TaggedComponentsBuilder",
    "TagRewriter",
    "join_comment_pieces",
    "strip_comment_markers",
]
