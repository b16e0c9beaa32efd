"""Fn entrypoint; func.yaml points the fdk runtime at ``handler`` here."""

from text2pdf_function.fn_handlers.text2pdf_handler import handler

__all__ = ["handler"]
