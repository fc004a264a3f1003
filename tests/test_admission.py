import pytest

from services.admission import AdmissionGuard
from services.exceptions import CreationInProgress


class TestAdmissionGuard:

    async def test_admit_marks_and_releases(self):
        guard = AdmissionGuard()
        async with guard.admit("T1", "C1"):
            assert guard.is_busy("T1", "C1")
            assert not guard.is_busy("T1", "C2")
            assert not guard.is_busy("T2", "C1")
        assert not guard.is_busy("T1", "C1")

    async def test_second_admit_rejected(self):
        guard = AdmissionGuard()
        async with guard.admit("T1", "C1"):
            with pytest.raises(CreationInProgress):
                async with guard.admit("T1", "C1"):
                    pass
            # the failed attempt must not release the holder's mark
            assert guard.is_busy("T1", "C1")

    async def test_released_on_error(self):
        guard = AdmissionGuard()
        with pytest.raises(RuntimeError):
            async with guard.admit("T1", "C1"):
                raise RuntimeError("insert failed")
        assert not guard.is_busy("T1", "C1")

    def test_creation_in_progress_is_retryable(self):
        err = CreationInProgress("T1", "C1")
        assert err.retryable
        assert err.category == "conflict"
