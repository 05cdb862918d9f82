"""Assertions over messages a checker sent to a mocked linter."""

import unittest.mock


class CheckerTestCase:
    """Mixin for Checker tests whose ``checker.linter`` is a MagicMock."""

    def assertAddsMessage(self, checker, msg_id, node=None, args=None):
        """Verify that checker.add_message was called for ``msg_id`` (and node/args when given)."""
        calls = checker.linter.add_message.call_args_list
        for call in calls:
            c_args, c_kwargs = call
            if not c_args or c_args[0] != msg_id:
                continue

            # BaseChecker.add_message forwards (msgid, line, node, args, ...) positionally
            actual_node = c_args[2] if len(c_args) > 2 else c_kwargs.get("node")
            actual_args = c_args[3] if len(c_args) > 3 else c_kwargs.get("args")

            if node is not None and actual_node != node:
                continue
            if args is not None and args != unittest.mock.ANY and actual_args != args:
                continue
            return

        raise AssertionError(f"Message {msg_id} not found in calls: {calls}")

    def assertNoMessages(self, checker):
        calls = checker.linter.add_message.call_args_list
        if calls:
            raise AssertionError(f"Expected no messages, but found: {calls}")
