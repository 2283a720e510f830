"""
Unit tests for the credential verifier.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from roster.core.auth import authorize
from roster.core.exceptions import AuthenticationError, ValidationError
from roster.core.security import hash_password
from roster.modules.accounts.models import Account
from roster.modules.auth.service import authenticate


@pytest.fixture
def account():
    account = MagicMock(spec=Account)
    account.id = "0b6f1f4e-7a38-4c1b-9a3e-6d9f1b0c2a11"
    account.username = "operator"
    account.password_hash = hash_password("right-password")
    return account


class TestAuthenticate:
    """Tests for authenticate()."""

    @pytest.mark.asyncio
    async def test_valid_credentials_issue_a_token_the_gate_accepts(
        self, mock_db, token_config, account
    ):
        with patch("roster.modules.auth.service.AccountRepository") as mock_repo:
            mock_repo.get_by_username = AsyncMock(return_value=account)

            token = await authenticate(mock_db, token_config, "operator", "right-password")

        assert authorize(token_config, f"Bearer {token}") == account.id
        mock_repo.get_by_username.assert_awaited_once_with(mock_db, "operator")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "username,password",
        [(None, "pw"), ("operator", None), ("", "pw"), ("operator", "")],
    )
    async def test_missing_credentials(self, mock_db, token_config, username, password):
        with patch("roster.modules.auth.service.AccountRepository") as mock_repo:
            mock_repo.get_by_username = AsyncMock()

            with pytest.raises(ValidationError):
                await authenticate(mock_db, token_config, username, password)

            mock_repo.get_by_username.assert_not_called()

    @pytest.mark.asyncio
    async def test_unknown_username(self, mock_db, token_config):
        with patch("roster.modules.auth.service.AccountRepository") as mock_repo:
            mock_repo.get_by_username = AsyncMock(return_value=None)

            with pytest.raises(AuthenticationError) as exc_info:
                await authenticate(mock_db, token_config, "ghost", "pw")

        assert exc_info.value.status_code == 400

    @pytest.mark.asyncio
    async def test_wrong_password_uses_same_message_as_unknown_user(
        self, mock_db, token_config, account
    ):
        with patch("roster.modules.auth.service.AccountRepository") as mock_repo:
            mock_repo.get_by_username = AsyncMock(return_value=account)
            with pytest.raises(AuthenticationError) as wrong_password:
                await authenticate(mock_db, token_config, "operator", "wrong")

            mock_repo.get_by_username = AsyncMock(return_value=None)
            with pytest.raises(AuthenticationError) as unknown_user:
                await authenticate(mock_db, token_config, "ghost", "wrong")

        assert wrong_password.value.message == unknown_user.value.message
