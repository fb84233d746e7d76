from picols.document_model import DocumentIndex
from picols.typing import URI


class WorkspaceIndex:
    def __init__(self) -> None:
        self.docs: dict[URI, DocumentIndex] = {}

    def load(self, uri: URI, source: str | None = None) -> DocumentIndex:
        self.docs[uri] = DocumentIndex.load(uri, source)
        return self.docs[uri]

    def get_or_load(self, uri: URI, source: str | None = None) -> DocumentIndex:
        if uri not in self.docs:
            self.load(uri, source)
        return self.docs[uri]

    def close(self, uri: URI):
        self.docs.pop(uri, None)
