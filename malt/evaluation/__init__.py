"""Evaluation: special forms, application and the tail-call trampoline."""
