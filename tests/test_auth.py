"""Tests for account authentication and the user/trade relationship."""

from datetime import datetime

import pyotp
import pytest
from sqlmodel import select

from journal.models.trade import Outcome, Side, Trade
from journal.models.user import User
from journal.services.auth import (
    AuthError,
    authenticate_user,
    create_access_token,
    decode_access_token,
)


def _code(user: User) -> str:
    return pyotp.TOTP(user.totp_secret).now()


class TestAuthenticateUser:
    def test_success_records_last_login(self, session, user):
        assert user.last_login_at is None
        logged_in = authenticate_user(session, "alice", "hunter2", _code(user))
        assert logged_in.id == user.id
        assert logged_in.last_login_at is not None

    @pytest.mark.parametrize("username, password", [("alice", "wrong"), ("nobody", "hunter2")])
    def test_bad_credentials(self, session, user, username, password):
        with pytest.raises(AuthError, match="Invalid credentials"):
            authenticate_user(session, username, password, _code(user))

    def test_inactive_user_is_rejected_like_a_bad_password(self, session, user):
        user.is_active = False
        session.add(user)
        session.commit()
        with pytest.raises(AuthError, match="Invalid credentials"):
            authenticate_user(session, "alice", "hunter2", _code(user))

    def test_bad_totp(self, session, user, caplog):
        with pytest.raises(AuthError, match="Invalid TOTP code"):
            authenticate_user(session, "alice", "hunter2", "000000x")
        assert "Invalid TOTP code" in caplog.text
        session.refresh(user)
        assert user.last_login_at is None


class TestTokens:
    def test_subject_is_user_id(self):
        assert decode_access_token(create_access_token(42)) == 42

    def test_expired_token(self):
        assert decode_access_token(create_access_token(42, expires_minutes=-1)) is None

    def test_garbage_token(self):
        assert decode_access_token("not-a-jwt") is None


class TestUserTrades:
    def _add_trade(self, session, owner: User):
        trade = Trade(
            owner_id=owner.id,
            date=datetime(2024, 3, 1),
            pair="EURUSD",
            side=Side.BUY,
            entry=1.1,
            stop_loss=1.095,
            take_profit=1.11,
            outcome=Outcome.WIN,
            pips=100.0,
            risk_reward=2.0,
        )
        session.add(trade)
        session.commit()
        return trade

    def test_trades_relationship(self, session, user):
        trade = self._add_trade(session, user)
        session.refresh(user)
        assert [t.id for t in user.trades] == [trade.id]
        assert trade.owner.username == "alice"

    def test_deleting_user_deletes_their_trades(self, session, user, other_user):
        self._add_trade(session, user)
        kept = self._add_trade(session, other_user)

        session.delete(user)
        session.commit()

        remaining = session.exec(select(Trade)).all()
        assert [t.id for t in remaining] == [kept.id]
