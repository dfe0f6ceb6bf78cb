"""Unit tests for the fixed-window rate limiter.

All tests drive the limiter with a fake millisecond clock so window
boundaries are exact.
"""

import threading

import pytest

from blueprint.domain.rate_limiting.services import FixedWindowRateLimiter
from blueprint.domain.rate_limiting.value_objects import (
    RateLimitAction,
    RateLimitPolicy,
    RateLimitPolicyTable,
)
from blueprint.infrastructure.rate_limiting.in_memory_window_repository import (
    InMemoryRateLimitWindowRepository,
)

LOGIN_WINDOW_MS = 15 * 60 * 1000
EMAIL = "user@example.com"


def exhaust(limiter, action, identifier, attempts):
    return [limiter.check_limit(action, identifier) for _ in range(attempts)]


class TestCheckLimit:

    @pytest.mark.unit
    def test_admits_up_to_max_attempts_then_denies(self, rate_limiter):
        decisions = exhaust(rate_limiter, "login", EMAIL, 6)

        assert [d.allowed for d in decisions] == [True] * 5 + [False]
        assert [d.count for d in decisions] == [1, 2, 3, 4, 5, 6]
        assert all(d.retry_after_seconds is None and d.message is None for d in decisions[:5])

        denied = decisions[-1]
        assert denied.retry_after_seconds == 900
        assert denied.message == "Too many attempts. Please try again in 15 minutes."
        assert denied.limit == 5

    @pytest.mark.unit
    def test_enum_and_string_actions_share_a_window(self, rate_limiter):
        rate_limiter.check_limit(RateLimitAction.LOGIN, EMAIL)
        decision = rate_limiter.check_limit("login", EMAIL)
        assert decision.count == 2

    @pytest.mark.unit
    def test_retry_after_rounds_up(self, rate_limiter, clock):
        exhaust(rate_limiter, "login", EMAIL, 5)
        clock.advance(LOGIN_WINDOW_MS - 500)

        denied = rate_limiter.check_limit("login", EMAIL)
        assert not denied.allowed
        assert denied.retry_after_seconds == 1
        assert denied.message == "Too many attempts. Please try again in 1 minutes."

    @pytest.mark.unit
    def test_minutes_round_up(self, rate_limiter, clock):
        exhaust(rate_limiter, "login", EMAIL, 5)
        clock.advance(LOGIN_WINDOW_MS - 61_000)
        denied = rate_limiter.check_limit("login", EMAIL)
        assert denied.retry_after_seconds == 61
        assert "2 minutes" in denied.message

    @pytest.mark.unit
    def test_denials_are_counted_and_never_extend_the_window(self, rate_limiter, clock):
        exhaust(rate_limiter, "login", EMAIL, 5)
        expires_at = rate_limiter.get_window("login", EMAIL).expires_at_ms

        clock.advance(1_000)
        exhaust(rate_limiter, "login", EMAIL, 3)

        window = rate_limiter.get_window("login", EMAIL)
        assert window.count == 8
        assert window.expires_at_ms == expires_at

    @pytest.mark.unit
    def test_window_restarts_once_expired(self, rate_limiter, clock):
        exhaust(rate_limiter, "login", EMAIL, 9)
        clock.advance(LOGIN_WINDOW_MS)

        decision = rate_limiter.check_limit("login", EMAIL)
        assert decision.allowed
        assert decision.count == 1
        assert rate_limiter.get_window("login", EMAIL).expires_at_ms == clock() + LOGIN_WINDOW_MS

    @pytest.mark.unit
    def test_window_still_active_one_ms_before_expiry(self, rate_limiter, clock):
        exhaust(rate_limiter, "login", EMAIL, 5)
        clock.advance(LOGIN_WINDOW_MS - 1)
        assert not rate_limiter.check_limit("login", EMAIL).allowed

    @pytest.mark.unit
    def test_unlisted_action_uses_default_policy(self, rate_limiter):
        decisions = exhaust(rate_limiter, "password_change", "uid-1", 11)
        assert [d.allowed for d in decisions] == [True] * 10 + [False]
        assert decisions[-1].retry_after_seconds == 60
        assert decisions[-1].limit == 10

    @pytest.mark.unit
    def test_identifiers_are_used_exactly_as_given(self, rate_limiter):
        exhaust(rate_limiter, "login", "User@Example.com", 5)
        assert not rate_limiter.check_limit("login", "User@Example.com").allowed
        assert rate_limiter.check_limit("login", "user@example.com").allowed
        assert rate_limiter.check_limit("login", " User@Example.com").allowed

    @pytest.mark.unit
    def test_actions_are_independent(self, rate_limiter):
        exhaust(rate_limiter, "register", EMAIL, 4)
        assert rate_limiter.check_limit("login", EMAIL).allowed

    @pytest.mark.unit
    def test_denial_message_in_spanish(self, rate_limiter):
        exhaust(rate_limiter, "register", EMAIL, 3)
        denied = rate_limiter.check_limit("register", EMAIL, language="es")
        assert denied.message == "Demasiados intentos. Inténtalo de nuevo en 60 minutos."


class TestResetAndMaintenance:

    @pytest.mark.unit
    def test_reset_restarts_counting(self, rate_limiter):
        exhaust(rate_limiter, "login", EMAIL, 6)
        rate_limiter.reset("login", EMAIL)

        assert rate_limiter.get_window("login", EMAIL) is None
        decision = rate_limiter.check_limit("login", EMAIL)
        assert decision.allowed
        assert decision.count == 1

    @pytest.mark.unit
    def test_reset_of_unknown_key_is_a_no_op(self, rate_limiter):
        rate_limiter.reset("login", "nobody@example.com")
        assert rate_limiter.get_window("login", "nobody@example.com") is None

    @pytest.mark.unit
    def test_cleanup_removes_only_expired_windows(self, rate_limiter, clock):
        rate_limiter.check_limit("default", "short-lived")
        rate_limiter.check_limit("login", EMAIL)
        clock.advance(60_000)

        assert rate_limiter.cleanup() == 1
        assert rate_limiter.get_window("default", "short-lived") is None
        assert rate_limiter.get_window("login", EMAIL).count == 1

    @pytest.mark.unit
    def test_cleanup_with_nothing_expired(self, rate_limiter):
        rate_limiter.check_limit("login", EMAIL)
        assert rate_limiter.cleanup() == 0

    @pytest.mark.unit
    def test_clear_all(self, rate_limiter):
        rate_limiter.check_limit("login", EMAIL)
        rate_limiter.check_limit("register", EMAIL)
        rate_limiter.clear_all()
        assert rate_limiter.get_window("login", EMAIL) is None
        assert rate_limiter.get_window("register", EMAIL) is None

    @pytest.mark.unit
    def test_injected_repository_is_used(self, clock):
        repository = InMemoryRateLimitWindowRepository()
        limiter = FixedWindowRateLimiter(
            RateLimitPolicyTable.default(), repository=repository, clock=clock
        )
        limiter.check_limit("login", EMAIL)
        assert len(repository) == 1

    @pytest.mark.unit
    def test_empty_injected_repository_is_kept(self, clock):
        repository = InMemoryRateLimitWindowRepository()
        assert len(repository) == 0
        limiter = FixedWindowRateLimiter(RateLimitPolicyTable.default(), repository, clock=clock)
        limiter.check_limit("login", EMAIL)

        assert len(repository) == 1
        assert repository.get(limiter.get_window("login", EMAIL).key).count == 1

    @pytest.mark.unit
    def test_limiters_sharing_a_repository_share_counts(self, clock):
        repository = InMemoryRateLimitWindowRepository()
        first = FixedWindowRateLimiter(RateLimitPolicyTable.default(), repository, clock=clock)
        second = FixedWindowRateLimiter(RateLimitPolicyTable.default(), repository, clock=clock)

        first.check_limit("login", EMAIL)
        assert second.check_limit("login", EMAIL).count == 2


class TestConcurrency:

    @pytest.mark.unit
    def test_concurrent_attempts_are_all_counted(self, clock):
        policies = RateLimitPolicyTable(
            {"default": RateLimitPolicy(max_attempts=10_000, window_ms=LOGIN_WINDOW_MS)}
        )
        limiter = FixedWindowRateLimiter(
            policies, InMemoryRateLimitWindowRepository(), clock=clock
        )

        def worker():
            for _ in range(50):
                limiter.check_limit("login", EMAIL)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert limiter.get_window("login", EMAIL).count == 500
