from malt.reader.parser import Reader, Token, TokenStream, lex, lex_lines, read_all, read_str

__all__ = ["Reader", "Token", "TokenStream", "lex", "lex_lines", "read_all", "read_str"]
