from app.schemas.components import Block, CodeBlock, parse_block

__all__ = ["Block", "CodeBlock", "parse_block"]
