# File: src/blockscope/explorer/renderer.py
"""Pure rendering of a ViewState into a tree of display nodes.

Nothing here touches the store or the provider; the HTTP layer serializes
the tree either as JSON or, through render_html(), as the page the browser
shows.
"""
from dataclasses import dataclass, field
from html import escape
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from .models import BlockSummary, Transaction
from .state import ScreenKind, ViewState
from ..utils.config import Config
from ..utils.formatting import (
    format_gas_price,
    format_optional,
    format_recipient,
    format_timestamp,
    format_wei,
    has_payload,
    preview,
)

@dataclass(frozen=True)
class Action:
    type: str
    number: Optional[int] = None
    hash: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"type": self.type}
        if self.number is not None:
            data["number"] = self.number
        if self.hash is not None:
            data["hash"] = self.hash
        return data

@dataclass(frozen=True)
class ViewNode:
    tag: str
    text: Optional[str] = None
    class_name: Optional[str] = None
    children: List['ViewNode'] = field(default_factory=list)
    action: Optional[Action] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"tag": self.tag}
        if self.text is not None:
            data["text"] = self.text
        if self.class_name is not None:
            data["class"] = self.class_name
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        if self.action is not None:
            data["action"] = self.action.to_dict()
        return data

    def iter_text(self):
        """Yield every text fragment in document order."""
        if self.text is not None:
            yield self.text
        for child in self.children:
            yield from child.iter_text()

def _detail(label: str, value: Any, class_name: Optional[str] = None) -> ViewNode:
    return ViewNode("div", class_name="detail-item", children=[
        ViewNode("strong", text=f"{label}:"),
        ViewNode("span", text=str(value), class_name=class_name),
    ])

def _page(*children: ViewNode) -> ViewNode:
    return ViewNode("div", class_name="App", children=[
        ViewNode("div", class_name="container", children=list(children)),
    ])

def _error(message: str) -> ViewNode:
    return ViewNode("div", text=f"Error: {message}", class_name="error")

def render(state: ViewState) -> ViewNode:
    if state.kind is ScreenKind.TRANSACTION_DETAIL:
        return render_transaction_detail(state.selected_transaction)
    if state.kind is ScreenKind.BLOCK_DETAIL:
        return render_block_detail(state)
    return render_block_list(state)

def render_block_list(state: ViewState) -> ViewNode:
    # An error beside a loaded window belongs to a block detail load
    if state.error and not state.blocks:
        return _page(_error(state.error))

    if state.loading:
        body = ViewNode("div", text="Loading blocks...")
    else:
        body = ViewNode("div", class_name="blocks-list",
                        children=[_block_item(block) for block in state.blocks])
    return _page(ViewNode("h1", text="Recent Blocks"), body)

def _block_item(block: BlockSummary) -> ViewNode:
    return ViewNode("div", class_name="block-item", action=Action("select_block", number=block.number), children=[
        ViewNode("div", class_name="block-header", children=[
            ViewNode("span", text=f"Block #{block.number}", class_name="block-number"),
            ViewNode("span", text=format_timestamp(block.timestamp), class_name="block-timestamp"),
        ]),
        ViewNode("div", class_name="block-details", children=[
            _detail("Hash", preview(block.hash, Config.BLOCK_HASH_PREVIEW_LENGTH)),
            _detail("Transactions", block.transaction_count),
            _detail("Gas Used", format_optional(block.gas_used)),
        ]),
    ])

def render_block_detail(state: ViewState) -> ViewNode:
    back = ViewNode("button", text="← Back to Blocks", class_name="back-button",
                    action=Action("back_to_blocks"))
    heading = ViewNode("h1", text="Block Details")

    if state.loading_detail:
        return _page(back, heading, ViewNode("div", text="Loading block details..."))
    if state.error:
        return _page(back, heading, _error(state.error))

    block = state.selected_block
    children = [back, heading, ViewNode("div", class_name="details-container", children=[
        _detail("Block Number", block.number),
        _detail("Hash", block.hash, "hash"),
        _detail("Parent Hash", block.parent_hash, "hash"),
        _detail("Timestamp", format_timestamp(block.timestamp)),
        _detail("Gas Limit", block.gas_limit),
        _detail("Gas Used", format_optional(block.gas_used)),
        _detail("Miner", block.miner, "address"),
        _detail("Transaction Count", block.transaction_count),
    ])]

    transactions = [tx for tx in block.transactions if isinstance(tx, Transaction)]
    if transactions:
        children.append(ViewNode("div", class_name="transactions-section", children=[
            ViewNode("h2", text=f"Transactions ({len(transactions)})"),
            ViewNode("div", class_name="transactions-list",
                     children=[_transaction_item(tx) for tx in transactions]),
        ]))
    return _page(*children)

def _transaction_item(tx: Transaction) -> ViewNode:
    return ViewNode("div", class_name="transaction-item", action=Action("select_transaction", hash=tx.hash), children=[
        ViewNode("div", class_name="transaction-header", children=[
            ViewNode("span", text=tx.hash, class_name="transaction-hash"),
        ]),
        ViewNode("div", class_name="transaction-details", children=[
            _detail("From", preview(tx.from_address, Config.ADDRESS_PREVIEW_LENGTH)),
            _detail("To", format_recipient(tx.to_address, Config.ADDRESS_PREVIEW_LENGTH)),
            _detail("Value", format_wei(tx.value)),
        ]),
    ])

def render_transaction_detail(tx: Transaction) -> ViewNode:
    details = [
        _detail("Hash", tx.hash, "hash"),
        _detail("From", tx.from_address, "address"),
        _detail("To", format_recipient(tx.to_address), "address"),
        _detail("Value", format_wei(tx.value)),
        _detail("Gas Limit", tx.gas_limit),
        _detail("Gas Price", format_gas_price(tx.gas_price)),
        _detail("Nonce", tx.nonce),
        _detail("Block Number", tx.block_number),
        _detail("Transaction Index", tx.transaction_index),
    ]
    if has_payload(tx.data):
        details.append(_detail("Data", tx.data, "data"))

    return _page(
        ViewNode("button", text="← Back to Block", class_name="back-button",
                 action=Action("back_to_transactions")),
        ViewNode("h1", text="Transaction Details"),
        ViewNode("div", class_name="details-container", children=details),
    )

# HTML serialization

_ACTION_ROUTES = {
    "select_block": lambda a: f"/ui/blocks/{a.number}",
    "select_transaction": lambda a: f"/ui/transactions/{quote(a.hash)}",
    "back_to_blocks": lambda a: "/ui/back/blocks",
    "back_to_transactions": lambda a: "/ui/back/transactions",
}

def action_url(action: Action) -> str:
    return _ACTION_ROUTES[action.type](action)

def _html_node(node: ViewNode) -> str:
    class_attr = f' class="{escape(node.class_name)}"' if node.class_name else ""
    inner = escape(node.text) if node.text is not None else ""
    inner += "".join(_html_node(child) for child in node.children)

    if node.action is None:
        return f"<{node.tag}{class_attr}>{inner}</{node.tag}>"
    url = escape(action_url(node.action))
    if node.tag == "button":
        return f'<form method="post" action="{url}"><button type="submit"{class_attr}>{inner}</button></form>'
    return (f'<form method="post" action="{url}"><button type="submit" class="link">'
            f'<{node.tag}{class_attr}>{inner}</{node.tag}></button></form>')

def render_html(node: ViewNode, title: str = "Block Explorer") -> str:
    return (
        "<!DOCTYPE html>"
        f'<html><head><meta charset="utf-8"><title>{escape(title)}</title></head>'
        f"<body>{_html_node(node)}</body></html>"
    )
