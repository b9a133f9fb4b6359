"""Tests for the borgmoea exception hierarchy."""

from __future__ import annotations

import pytest


class TestBorgError:
    """Test base BorgError class."""

    def test_basic_error(self):
        """BorgError should work with just a message."""
        from borgmoea.foundation.exceptions import BorgError

        err = BorgError("Something went wrong")
        assert "Something went wrong" in str(err)
        assert err.message == "Something went wrong"
        assert err.suggestion is None

    def test_error_with_suggestion(self):
        """BorgError should include suggestion in message."""
        from borgmoea.foundation.exceptions import BorgError

        err = BorgError("Something went wrong", suggestion="Try this instead")
        assert "Suggestion: Try this instead" in str(err)
        assert err.suggestion == "Try this instead"

    def test_error_with_details(self):
        from borgmoea.foundation.exceptions import BorgError

        err = BorgError("Error", details={"key": "value"})
        assert err.details == {"key": "value"}


class TestConfigurationErrors:
    """Test configuration-related errors."""

    def test_invalid_operator_error(self):
        """InvalidOperatorError should describe operator type and alternatives."""
        from borgmoea.foundation.exceptions import InvalidOperatorError

        err = InvalidOperatorError("variation", "bad_cx", available=["sbx", "pcx"])
        assert "variation" in str(err)
        assert "bad_cx" in str(err)
        assert "sbx" in str(err)

    def test_missing_config_error(self):
        from borgmoea.foundation.exceptions import MissingConfigError

        err = MissingConfigError("pop_size", "BorgConfig")
        assert "pop_size" in str(err)
        assert "BorgConfig.default()" in str(err)
        assert err.details["field"] == "pop_size"

    def test_invalid_parameter_error(self):
        from borgmoea.foundation.exceptions import InvalidParameterError

        err = InvalidParameterError("tau", -1.0, "a finite number > 0")
        assert "tau" in str(err)
        assert "-1.0" in str(err)
        assert err.details == {"name": "tau", "value": -1.0}


class TestRuntimeErrors:
    def test_archive_invariant_error_is_assertion(self):
        """Archive invariant breaks are assertion failures as well as borgmoea errors."""
        from borgmoea.foundation.exceptions import ArchiveInvariantError, BorgError, OptimizationError

        err = ArchiveInvariantError("broken", box=(1, 2))
        assert isinstance(err, AssertionError)
        assert isinstance(err, OptimizationError)
        assert isinstance(err, BorgError)
        assert err.details["box"] == (1, 2)

    def test_dependency_error_suggests_install(self):
        from borgmoea.foundation.exceptions import DependencyError

        err = DependencyError("pyyaml", "YAML run files")
        assert "pyyaml" in str(err)
        assert "pip install pyyaml" in str(err)


class TestExceptionHierarchy:
    def test_all_inherit_from_borg_error(self):
        """All custom exceptions should inherit from BorgError."""
        from borgmoea.foundation import exceptions

        for name in exceptions.__all__:
            cls = getattr(exceptions, name)
            assert issubclass(cls, exceptions.BorgError), name

    def test_catch_problem_errors_together(self):
        from borgmoea.foundation.exceptions import BoundsError, ProblemDimensionError, ProblemError

        with pytest.raises(ProblemError):
            raise BoundsError("bad bounds")
        with pytest.raises(ProblemError):
            raise ProblemDimensionError("bad dims", n_var=3, n_obj=2)
