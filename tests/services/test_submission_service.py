"""
Tests for the submission orchestrator: validation and sink independence.
"""

import pytest

from wildcard.domain.errors import ScoreParseError, ScoreSumError
from wildcard.services.submission_service import SubmissionResult, SubmissionService

BALANCED = {"Winz": 5, "Luffy": 10, "Lucas": -10, "Finn": -5}


@pytest.fixture
def service(mock_sheets, mock_chat) -> SubmissionService:
    return SubmissionService(mock_sheets, mock_chat)


class TestValidation:
    async def test_rejects_non_zero_sum_before_any_sink(self, service, mock_sheets, mock_chat):
        with pytest.raises(ScoreSumError) as exc_info:
            await service.submit({"Winz": 5, "Luffy": 10})

        assert exc_info.value.total == 15
        mock_sheets.append_record.assert_not_called()
        mock_chat.send_game_notification.assert_not_called()

    async def test_rejects_empty_entry(self, service, mock_sheets):
        with pytest.raises(ScoreParseError):
            await service.submit({})

        mock_sheets.append_record.assert_not_called()

    async def test_submit_text_rejects_unparseable(self, service, mock_sheets):
        with pytest.raises(ScoreParseError):
            await service.submit_text("Winz five, Luffy: 10")

        mock_sheets.append_record.assert_not_called()

    async def test_submit_text_rejects_unbalanced(self, service):
        with pytest.raises(ScoreSumError) as exc_info:
            await service.submit_text("Winz: 5, Luffy: 10")

        assert exc_info.value.total == 15


class TestSubmit:
    async def test_both_sinks_succeed(self, service, mock_sheets, mock_chat):
        result = await service.submit(BALANCED, "winz_tg")

        assert isinstance(result, SubmissionResult)
        assert result.scores == BALANCED
        assert result.sheet_success and result.chat_success
        assert result.fully_saved
        assert result.submitted_by == "winz_tg"
        mock_sheets.append_record.assert_awaited_once_with(BALANCED, "winz_tg")
        mock_chat.send_game_notification.assert_awaited_once_with(BALANCED, "winz_tg")
        mock_chat.send_error_notification.assert_not_called()

    async def test_submit_text(self, service, mock_sheets):
        result = await service.submit_text("Winz: 5, Luffy: 10, Lucas: -10, Finn: -5")

        assert result.scores == BALANCED
        mock_sheets.append_record.assert_awaited_once_with(BALANCED, None)

    async def test_sheet_failure_does_not_block_chat(self, service, mock_sheets, mock_chat):
        mock_sheets.append_record.return_value = False

        result = await service.submit(BALANCED)

        assert result.sheet_success is False
        assert result.chat_success is True
        assert not result.fully_saved
        mock_chat.send_game_notification.assert_awaited_once()

    async def test_chat_failure_does_not_affect_sheet(self, service, mock_sheets, mock_chat):
        mock_chat.send_game_notification.return_value = False

        result = await service.submit(BALANCED)

        assert result.sheet_success is True
        assert result.chat_success is False
        mock_chat.send_error_notification.assert_not_called()

    async def test_sink_exceptions_become_failures(self, service, mock_sheets, mock_chat):
        mock_sheets.append_record.side_effect = RuntimeError("boom")
        mock_chat.send_game_notification.side_effect = RuntimeError("boom")

        result = await service.submit(BALANCED)

        assert result.sheet_success is False
        assert result.chat_success is False

    async def test_sheet_failure_alerts_chat(self, service, mock_sheets, mock_chat):
        mock_sheets.append_record.return_value = False

        await service.submit(BALANCED)

        mock_chat.send_error_notification.assert_awaited_once()
        alert = mock_chat.send_error_notification.await_args.args[0]
        assert "Winz: +5" in alert

    async def test_no_alert_when_chat_also_failed(self, service, mock_sheets, mock_chat):
        mock_sheets.append_record.return_value = False
        mock_chat.send_game_notification.return_value = False

        await service.submit(BALANCED)

        mock_chat.send_error_notification.assert_not_called()

    async def test_alert_failure_does_not_change_result(self, service, mock_sheets, mock_chat):
        mock_sheets.append_record.return_value = False
        mock_chat.send_error_notification.side_effect = RuntimeError("boom")

        result = await service.submit(BALANCED)

        assert result.sheet_success is False
        assert result.chat_success is True

    async def test_unmatched_names_still_count_toward_sum(self, service, mock_sheets):
        result = await service.submit({"Winz": 5, "Zorro": -5})

        assert result.scores == {"Winz": 5, "Zorro": -5}
        mock_sheets.append_record.assert_awaited_once_with({"Winz": 5, "Zorro": -5}, None)
