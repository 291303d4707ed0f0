"""Unit tests for ConstructionResult."""

from abc import ABC, abstractmethod

import pytest

from deepmock.application.mock_factory import AutospecMockFactory
from deepmock.application.result import ConstructionResult
from deepmock.domain import ConstructionRecord, DependencyNotFoundError, NotMockedError


class IMailer(ABC):
    @abstractmethod
    def send(self, to: str) -> bool: ...


class Logger:
    pass


class Signup:
    def __init__(self, mailer: IMailer, logger: Logger):
        self.mailer = mailer
        self.logger = logger


class Unrelated:
    pass


@pytest.fixture
def result():
    mailer, handle = AutospecMockFactory().create(IMailer)
    logger = Logger()
    signup = Signup(mailer, logger)
    records = {
        IMailer: ConstructionRecord(dependency_type=IMailer, implementation=mailer, control_handle=handle),
        Logger: ConstructionRecord(dependency_type=Logger, implementation=logger),
        Signup: ConstructionRecord(dependency_type=Signup, implementation=signup),
    }
    return ConstructionResult(records, Signup)


class TestGetSubject:
    """Test cases for subject access."""

    def test_get_subject_by_type(self, result):
        """Test that the subject is returned for its type."""
        assert isinstance(result.get_subject(Signup), Signup)

    def test_get_subject_defaults_to_root(self, result):
        """Test that the subject type can be omitted."""
        assert result.get_subject() is result.get_subject(Signup)

    def test_get_subject_for_other_type_raises(self, result):
        """Test that asking for another type as subject fails."""
        with pytest.raises(DependencyNotFoundError):
            result.get_subject(Logger)


class TestGetControlHandle:
    """Test cases for control handle access."""

    def test_handle_of_mocked_dependency(self, result):
        """Test that mocked dependencies expose their handle."""
        handle = result.get_control_handle(IMailer)

        assert handle is not None
        assert handle.mock is result.get_subject().mailer

    def test_handle_of_constructed_dependency_raises(self, result):
        """Test that constructed dependencies have no handle."""
        with pytest.raises(NotMockedError) as exc_info:
            result.get_control_handle(Logger)

        assert exc_info.value.cls is Logger

    def test_handle_of_unknown_type_raises(self, result):
        """Test that types outside the resolution are not found."""
        with pytest.raises(DependencyNotFoundError):
            result.get_control_handle(Unrelated)

    def test_get_mock(self, result):
        """Test direct access to the mock object."""
        assert result.get_mock(IMailer) is result.get_subject().mailer


class TestReadOnlyView:
    """Test cases for the mapping view of a result."""

    def test_records_cannot_be_mutated(self, result):
        """Test that the records mapping is read-only."""
        with pytest.raises(TypeError):
            result.records[Unrelated] = None

    def test_result_is_detached_from_source_mapping(self):
        """Test that mutating the mapping used to build the result changes nothing."""
        records = {Logger: ConstructionRecord(dependency_type=Logger, implementation=Logger())}
        result = ConstructionResult(records, Logger)

        records.clear()

        assert Logger in result

    def test_container_protocol(self, result):
        """Test len, iteration and membership."""
        assert len(result) == 3
        assert set(result) == {IMailer, Logger, Signup}
        assert Logger in result
        assert Unrelated not in result

    def test_mocked_types(self, result):
        """Test listing of mocked types."""
        assert result.mocked_types() == [IMailer]

    def test_get_implementation(self, result):
        """Test access to any implementation."""
        assert isinstance(result.get_implementation(Logger), Logger)

    def test_repr(self, result):
        """Test the result representation."""
        assert repr(result) == "ConstructionResult(subject=Signup, records=3, mocked=1)"
