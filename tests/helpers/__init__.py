"""Test helper utilities for CareerNavigate tests."""

from .scripted_chat import ScriptedChatAdapter, load_fixture_replies

__all__ = ["ScriptedChatAdapter", "load_fixture_replies"]
