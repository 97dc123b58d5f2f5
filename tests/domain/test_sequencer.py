"""Tests for domain/sequencer.py — ordering, outcomes and misuse of composite actions."""

import pytest

from wikibot.context import BotContext
from wikibot.domain.actions import CategoryMembers, DeletePage, ReadPage
from wikibot.domain.errors import (
    ConfigurationError,
    DomainError,
    MalformedResponse,
    SequenceExhausted,
    SequenceMisuse,
    TokenError,
)
from wikibot.domain.models import (
    Continue,
    DeleteResult,
    DomainResult,
    Failed,
    HttpMethod,
    SequenceState,
    Version,
)
from wikibot.domain.sequencer import CompositeAction, describe

TOKEN_XML = '<api><query><pages><page ns="0" title="Foo" deletetoken="abc123" /></pages></query></api>'
NO_TOKEN_XML = '<api><query><pages><page ns="0" title="Foo" /></pages></query></api>'
DELETE_XML = '<api><delete title="Foo" reason="spam" /></api>'
PERMISSION_DENIED_XML = (
    '<api><error code="permissiondenied" info="You don\'t have permission to delete pages" /></api>'
)
CATEGORY_PAGE_1 = (
    "<api>"
    '<query><categorymembers><cm ns="0" title="A" /><cm ns="0" title="B" /></categorymembers></query>'
    '<query-continue><categorymembers cmcontinue="page|42|B" /></query-continue>'
    "</api>"
)
CATEGORY_PAGE_2 = '<api><query><categorymembers><cm ns="0" title="C" /></categorymembers></query></api>'
CATEGORY_ERROR_WITH_MARKER = (
    "<api>"
    '<error code="permissiondenied" info="nope" />'
    '<query-continue><categorymembers cmcontinue="page|42|B" /></query-continue>'
    "</api>"
)


def run_token_step(action, parse, body=TOKEN_XML):
    request = action.next()
    return request, action.process(request, parse(body))


class TestOrdering:
    def test_token_request_comes_first(self, context):
        action = CompositeAction(DeletePage("Foo"), context)
        assert action.state is SequenceState.AWAITING_TOKEN
        first = action.next()
        assert first.method is HttpMethod.GET
        assert first.get("intoken") == "delete"
        assert first.get("titles") == "Foo"

    def test_primary_not_built_before_token_processed(self, context):
        action = CompositeAction(DeletePage("Foo"), context)
        action.next()
        assert action.has_next() is False
        with pytest.raises(SequenceMisuse):
            action.next()

    def test_primary_uses_fetched_token(self, context, parse):
        action = CompositeAction(DeletePage("Foo", "spam"), context)
        _, outcome = run_token_step(action, parse)
        assert outcome == Continue(SequenceState.AWAITING_PRIMARY)
        primary = action.next()
        assert primary.method is HttpMethod.POST
        assert primary.get("action") == "delete"
        assert primary.get("token") == "abc123"
        assert primary.get("reason") == "spam"

    def test_token_is_spent_once_used(self, context, parse):
        action = CompositeAction(DeletePage("Foo"), context)
        run_token_step(action, parse)
        assert action.token.fresh is True
        action.next()
        assert action.token.fresh is False
        assert action.token.value == "abc123"

    def test_no_token_action_starts_at_primary(self, context):
        action = CompositeAction(ReadPage("Foo"), context)
        assert action.state is SequenceState.AWAITING_PRIMARY
        assert action.next().get("prop") == "revisions"

    def test_reason_omitted_when_absent(self, context, parse):
        action = CompositeAction(DeletePage("Foo"), context)
        run_token_step(action, parse)
        assert action.next().get("reason") is None


class TestVersionGating:
    def test_unsupported_version_fails_before_any_request(self, context):
        context.version = Version.MW1_14
        with pytest.raises(ConfigurationError, match="not supported"):
            CompositeAction(DeletePage("Foo"), context)

    @pytest.mark.parametrize("version", [Version.MW1_15, Version.MW1_18, Version.MW1_20])
    def test_supported_versions_construct(self, context, version):
        context.version = version
        action = CompositeAction(DeletePage("Foo"), context)
        assert action.has_next() is True

    def test_development_wiki_cannot_delete(self, context):
        context.version = Version.DEVELOPMENT
        with pytest.raises(ConfigurationError):
            CompositeAction(DeletePage("Foo"), context)


class TestDeleteScenarios:
    def test_user_without_delete_right(self, reader, log_lines):
        ctx = BotContext(version=Version.MW1_18, userinfo=reader, sink=log_lines.append)
        with pytest.raises(ConfigurationError, match="delete"):
            CompositeAction(DeletePage("Foo"), ctx)

    def test_unknown_userinfo_is_rejected(self):
        ctx = BotContext(version=Version.MW1_18, sink=lambda msg: None)
        with pytest.raises(ConfigurationError, match="userinfo"):
            CompositeAction(DeletePage("Foo"), ctx)

    def test_empty_title_is_rejected(self):
        with pytest.raises(ConfigurationError, match="title"):
            DeletePage("")

    def test_successful_delete(self, context, parse, log_lines):
        action = CompositeAction(DeletePage("Foo", "spam"), context)
        run_token_step(action, parse)
        primary = action.next()
        outcome = action.process(primary, parse(DELETE_XML))

        assert outcome == DomainResult(DeleteResult(title="Foo", reason="spam"))
        assert action.state is SequenceState.DONE
        assert action.has_next() is False
        assert action.error is None
        assert "[wikibot] Deleted article 'Foo' with reason 'spam'" in log_lines

    def test_permission_denied(self, context, parse):
        action = CompositeAction(DeletePage("Foo"), context)
        run_token_step(action, parse)
        primary = action.next()
        outcome = action.process(primary, parse(PERMISSION_DENIED_XML))

        assert isinstance(outcome, Failed)
        assert isinstance(outcome.error, DomainError)
        assert outcome.error.code == "permissiondenied"
        assert "permission" in outcome.error.info
        assert "$wgGroupPermissions" in outcome.error.hint
        assert action.state is SequenceState.DONE
        assert action.has_next() is False

    def test_error_in_token_response(self, context, parse):
        action = CompositeAction(DeletePage("Foo"), context)
        _, outcome = run_token_step(action, parse, PERMISSION_DENIED_XML)
        assert isinstance(outcome, Failed)
        assert outcome.error.code == "permissiondenied"
        assert action.has_next() is False

    def test_missing_token_is_fatal(self, context, parse):
        action = CompositeAction(DeletePage("Foo"), context)
        _, outcome = run_token_step(action, parse, NO_TOKEN_XML)
        assert isinstance(outcome, Failed)
        assert isinstance(outcome.error, TokenError)
        assert action.state is SequenceState.DONE

    def test_unexpected_success_reply_is_malformed(self, context, parse):
        action = CompositeAction(DeletePage("Foo"), context)
        run_token_step(action, parse)
        primary = action.next()
        outcome = action.process(primary, parse("<api><edit result='Success' /></api>"))
        assert isinstance(outcome, Failed)
        assert isinstance(outcome.error, MalformedResponse)
        assert action.has_next() is False


class TestContinuation:
    def test_marker_keeps_sequence_open(self, context, parse):
        action = CompositeAction(CategoryMembers("Animals"), context)
        first = action.next()
        outcome = action.process(first, parse(CATEGORY_PAGE_1))

        assert outcome == Continue(SequenceState.AWAITING_CONTINUATION, partial=["A", "B"])
        assert action.has_next() is True
        follow_up = action.next()
        assert follow_up.params == first.params + (("cmcontinue", "page|42|B"),)

    def test_no_marker_ends_sequence(self, context, parse):
        action = CompositeAction(CategoryMembers("Animals"), context)
        first = action.next()
        action.process(first, parse(CATEGORY_PAGE_1))
        second = action.next()
        outcome = action.process(second, parse(CATEGORY_PAGE_2))

        assert outcome == DomainResult(["A", "B", "C"])
        assert action.last_page == ["C"]
        assert action.has_next() is False

    def test_error_node_wins_over_marker(self, context, parse):
        action = CompositeAction(CategoryMembers("Animals"), context)
        request = action.next()
        outcome = action.process(request, parse(CATEGORY_ERROR_WITH_MARKER))

        assert isinstance(outcome, Failed)
        assert outcome.error.code == "permissiondenied"
        assert action.state is SequenceState.DONE
        assert action.has_next() is False


class TestMisuse:
    def test_second_process_after_done_is_rejected(self, context, parse):
        action = CompositeAction(ReadPage("Foo"), context)
        request = action.next()
        body = parse('<api><query><pages><page title="Foo" missing="" /></pages></query></api>')
        action.process(request, body)
        with pytest.raises(SequenceExhausted):
            action.process(request, body)

    def test_second_process_mid_sequence_is_rejected(self, context, parse):
        action = CompositeAction(CategoryMembers("Animals"), context)
        request = action.next()
        action.process(request, parse(CATEGORY_PAGE_1))
        with pytest.raises(SequenceMisuse):
            action.process(request, parse(CATEGORY_PAGE_1))
        assert action.state is SequenceState.AWAITING_CONTINUATION

    def test_next_after_done(self, context, parse):
        action = CompositeAction(DeletePage("Foo"), context)
        run_token_step(action, parse, NO_TOKEN_XML)
        with pytest.raises(SequenceExhausted):
            action.next()

    def test_foreign_request_is_rejected(self, context, parse):
        action = CompositeAction(ReadPage("Foo"), context)
        action.next()
        other = CompositeAction(ReadPage("Bar"), context).next()
        with pytest.raises(SequenceMisuse):
            action.process(other, parse("<api />"))


class BrokenRead(ReadPage):
    def consume_response(self, root, context):
        raise ValueError("handler bug")


class TestAbnormalEnd:
    def test_abort_after_unparseable_response(self, context, parse, log_lines):
        action = CompositeAction(DeletePage("Foo"), context)
        run_token_step(action, parse)
        request = action.next()
        outcome = action.abort(request, MalformedResponse("Empty response body"))

        assert isinstance(outcome, Failed)
        assert action.state is SequenceState.DONE
        assert action.error is outcome.error
        assert "[wikibot] delete failed: Empty response body" in log_lines

    def test_abort_needs_the_outstanding_request(self, context):
        action = CompositeAction(ReadPage("Foo"), context)
        with pytest.raises(SequenceMisuse):
            action.abort(action.next().with_params([("x", "1")]), MalformedResponse("x"))

    def test_unexpected_handler_error_ends_sequence(self, context, parse):
        action = CompositeAction(BrokenRead("Foo"), context)
        request = action.next()
        with pytest.raises(ValueError):
            action.process(request, parse("<api />"))
        assert action.state is SequenceState.DONE
        assert action.has_next() is False
        with pytest.raises(SequenceExhausted):
            action.next()

    def test_has_next_is_false_while_waiting_for_response(self, context):
        action = CompositeAction(ReadPage("Foo"), context)
        action.next()
        assert action.has_next() is False
        assert action.state is not SequenceState.DONE


class TestDescribe:
    def test_token_is_masked(self, context, parse):
        action = CompositeAction(DeletePage("Foo"), context)
        run_token_step(action, parse)
        text = describe(action.next())
        assert "abc123" not in text
        assert "token=***" in text

    def test_requests_are_logged_in_debug(self, context, log_lines):
        CompositeAction(ReadPage("Foo"), context).next()
        assert any(line.startswith("[wikibot:debug] read: GET api.php?") for line in log_lines)
