"""
Tokenizer for sqlweave templates.

Splits a template on runs of whitespace and nests the resulting tokens
according to the ``{{`` / ``}}`` scope delimiters. The open scopes are kept on
an explicit stack while tokenizing, so the finished tree holds no links back
to parent scopes.

Example:
    tokenTree_build("A {{ B C }} D")
    -> TokenTree([A, TokenTree([B, C]), D])
"""

from sqlweave.lib.errors import UnbalancedDelimiterError
from sqlweave.lib.log import LOG
from sqlweave.models.dataModel import Keyword, LiteralToken, TokenTree


def tokenTree_build(template: str, strict: bool = True) -> TokenTree:
    """Build a tree of tokens from a template string.

    Args:
        template: Raw template text
        strict: If True, an unmatched ``}}`` or an unclosed ``{{`` raises
            UnbalancedDelimiterError. If False, an unmatched ``}}`` is
            ignored and open scopes are closed at the end of input.

    Returns:
        The root TokenTree

    Raises:
        UnbalancedDelimiterError: On unbalanced delimiters in strict mode
    """
    root: TokenTree = TokenTree()
    scopes: list[TokenTree] = [root]

    for position, token in enumerate(template.split()):
        if token == Keyword.SCOPE_OPEN.value:
            child: TokenTree = TokenTree()
            scopes[-1].tokens.append(child)
            scopes.append(child)
            continue

        if token == Keyword.SCOPE_CLOSE.value:
            if len(scopes) == 1:
                if strict:
                    raise UnbalancedDelimiterError(
                        f"'{Keyword.SCOPE_CLOSE.value}' at token {position} "
                        f"has no matching '{Keyword.SCOPE_OPEN.value}'"
                    )
                LOG(f"Ignoring unmatched '{token}' at token {position}")
                continue
            scopes.pop()
            continue

        scopes[-1].tokens.append(LiteralToken(token))

    unclosed: int = len(scopes) - 1
    if unclosed and strict:
        raise UnbalancedDelimiterError(
            f"{unclosed} '{Keyword.SCOPE_OPEN.value}' scope(s) left unclosed"
        )

    LOG(f"Tokenized template into {len(root.tokens)} top-level tokens")
    return root
