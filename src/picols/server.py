import logging
from typing import Any

import lsprotocol.types as L
from pygls.lsp.server import LanguageServer

from picols.workspace_model import WorkspaceIndex

log = logging.root

TAB_LINE_NUMBERS = "picols/tabLineNumbers"


class PicoLanguageServer(LanguageServer):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.workspace_index = WorkspaceIndex()


server = PicoLanguageServer("picols", "v0.1")


@server.feature(L.INITIALIZE)
def initialize(ls: PicoLanguageServer, params: L.InitializeParams):
    log.info("Initializing for client: %s", params.client_info)

    return L.InitializeResult(
        capabilities=L.ServerCapabilities(
            folding_range_provider=True,
            text_document_sync=L.TextDocumentSyncKind.Full,
        ),
        server_info=L.ServerInfo(
            name=ls.name,
            version=ls.version,
        ),
    )


@server.feature(L.TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: PicoLanguageServer, params: L.DidOpenTextDocumentParams):
    doc = params.text_document
    ls.workspace_index.load(doc.uri, doc.text)


@server.feature(L.TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: PicoLanguageServer, params: L.DidChangeTextDocumentParams):
    doc = ls.workspace.get_text_document(params.text_document.uri)
    ls.workspace_index.load(doc.uri, doc.source)


@server.feature(L.TEXT_DOCUMENT_DID_CLOSE)
def did_close(ls: PicoLanguageServer, params: L.DidCloseTextDocumentParams):
    ls.workspace_index.close(params.text_document.uri)


@server.feature(L.TEXT_DOCUMENT_FOLDING_RANGE)
def folding_range(ls: PicoLanguageServer, params: L.FoldingRangeParams):
    doc = ls.workspace.get_text_document(params.text_document.uri)
    return ls.workspace_index.get_or_load(doc.uri, doc.source).folding_ranges


@server.feature(TAB_LINE_NUMBERS)
def tab_line_numbers(ls: PicoLanguageServer, params: Any) -> list[dict[str, Any]]:
    # Parameters of custom requests are deserialized as plain objects keyed by the
    # original JSON field names.
    doc = ls.workspace.get_text_document(params.textDocument.uri)
    doc_index = ls.workspace_index.get_or_load(doc.uri, doc.source)
    return [line_number.to_json() for line_number in doc_index.tab_line_numbers]
