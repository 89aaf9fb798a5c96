"""Tests for Result type (Ok and Err)."""

import copy

import msgspec
import pytest
from hypothesis import given
from hypothesis import strategies as st
from strategies import errors, int_functions, payloads, results

from presult import (
    Err,
    InvalidResultStateError,
    MissingErrorPayloadError,
    Ok,
    PResultError,
    Result,
    ResultState,
    err,
    ok,
    to_result,
)


class TestOkCreation:
    """Tests for Ok instantiation and basic properties."""

    def test_ok_creation(self):
        """Ok wraps a value."""
        assert Ok(42).value == 42

    def test_ok_with_none(self):
        """Ok can wrap None, the unit value of an action with no result."""
        assert Ok(None).value is None

    def test_ok_requires_payload(self):
        """Ok cannot be constructed without a payload."""
        with pytest.raises(TypeError):
            Ok()  # type: ignore[call-arg]

    def test_ok_is_frozen(self):
        """Ok instances are immutable."""
        ok_value = Ok(42)
        with pytest.raises(AttributeError):
            ok_value.value = 100  # type: ignore[misc]

    def test_ok_factory(self):
        """ok() builds the Ok variant."""
        assert ok('x') == Ok('x')
        assert ok('x').state is ResultState.OK


class TestErrCreation:
    """Tests for Err instantiation and basic properties."""

    def test_err_creation(self):
        """Err wraps an error value."""
        assert Err('error message').error == 'error message'

    def test_err_keeps_exception_identity(self):
        """Err stores the exception object itself."""
        exc = ValueError('something went wrong')
        assert Err(exc).error is exc

    def test_err_requires_payload(self):
        """Err cannot be constructed without a payload."""
        with pytest.raises(TypeError):
            Err()  # type: ignore[call-arg]

    def test_err_rejects_none(self):
        """Err(None) is meaningless and rejected."""
        with pytest.raises(MissingErrorPayloadError):
            Err(None)

    def test_err_none_is_value_error(self):
        """The rejection is a ValueError and a PResultError."""
        with pytest.raises(ValueError, match='requires an error payload'):
            err(None)
        assert issubclass(MissingErrorPayloadError, PResultError)

    def test_err_falsy_payloads_allowed(self):
        """Only None is rejected; other falsy payloads are valid errors."""
        assert Err(0).error == 0
        assert Err('').error == ''
        assert Err(False).error is False

    def test_err_is_frozen(self):
        """Err instances are immutable."""
        err_value = Err('error')
        with pytest.raises(AttributeError):
            err_value.error = 'new error'  # type: ignore[misc]

    def test_err_factory(self):
        """err() builds the Err variant."""
        assert err('x') == Err('x')
        assert err('x').state is ResultState.ERR


class TestResultEquality:
    """Tests for Result equality and hashing."""

    def test_ok_equality(self):
        """Ok instances with same value are equal."""
        assert Ok(1) == Ok(1)
        assert Ok(1) != Ok(2)

    def test_err_equality(self):
        """Err instances with same error are equal."""
        assert Err('x') == Err('x')
        assert Err('x') != Err('y')

    def test_ok_not_equal_to_err(self):
        """Ok is never equal to Err, even with an identical payload."""
        assert Ok(1) != Err(1)
        assert Err(1) != Ok(1)

    def test_hashable(self):
        """Results with hashable payloads are hashable."""
        assert hash(Ok(42)) == hash(Ok(42))
        assert {Err('e'): 'value'}[Err('e')] == 'value'

    @given(payloads)
    def test_ok_reflexive(self, value):
        """Two Ok built from equal payloads compare equal."""
        assert Ok(value) == Ok(value)
        assert Ok(value) != Err(value)


class TestResultQuerying:
    """Tests for is_ok(), is_err() and state."""

    def test_ok_queries(self):
        """Ok reports the Ok variant."""
        assert Ok(42).is_ok() is True
        assert Ok(42).is_err() is False
        assert Ok(42).state is ResultState.OK

    def test_err_queries(self):
        """Err reports the Err variant."""
        assert Err('error').is_ok() is False
        assert Err('error').is_err() is True
        assert Err('error').state is ResultState.ERR

    @given(results)
    def test_exactly_one_variant(self, result: Result[object, object]):
        """Exactly one of is_ok / is_err holds."""
        assert result.is_ok() != result.is_err()


class TestResultMatch:
    """Tests for match()."""

    def test_match_ok(self):
        """match calls on_ok with the value."""
        assert Ok(2).match(lambda v: v * 10, lambda e: -1) == 20

    def test_match_err(self):
        """match calls on_err with the error."""
        assert Err('boom').match(lambda v: 'ok', lambda e: f'failed: {e}') == 'failed: boom'

    def test_match_never_calls_other_branch(self):
        """The inactive branch is never invoked."""
        calls: list[str] = []

        def on_ok(v):
            calls.append('ok')
            return v

        def on_err(e):
            calls.append('err')
            return e

        Ok(1).match(on_ok, on_err)
        Err(2).match(on_ok, on_err)
        assert calls == ['ok', 'err']

    @given(payloads)
    def test_match_ok_law(self, value):
        """match(Ok(v), on_ok, on_err) == on_ok(v)."""
        assert Ok(value).match(lambda v: ('ok', v), lambda e: ('err', e)) == ('ok', value)

    @given(errors)
    def test_match_err_law(self, error):
        """match(Err(e), on_ok, on_err) == on_err(e)."""
        assert Err(error).match(lambda v: ('ok', v), lambda e: ('err', e)) == ('err', error)


class TestResultThen:
    """Tests for then() and then_err()."""

    def test_then_ok(self):
        """then on Ok returns next(value)."""
        assert Ok(5).then(lambda x: Ok(x * 2)) == Ok(10)
        assert Ok(5).then(lambda x: Err('too small')) == Err('too small')

    def test_then_err_short_circuits(self):
        """then on Err never calls next and returns the Err."""
        called = False

        def step(x):
            nonlocal called
            called = True
            return Ok(x)

        assert Err('e').then(step) == Err('e')
        assert called is False

    def test_then_chain_stops_at_first_err(self):
        """A then-chain skips every step after the first Err."""
        steps: list[int] = []

        def step(n):
            def run(x):
                steps.append(n)
                return Err(f'step {n} failed') if n == 2 else Ok(x + 1)

            return run

        result = Ok(0).then(step(1)).then(step(2)).then(step(3)).then(step(4))
        assert result == Err('step 2 failed')
        assert steps == [1, 2]

    def test_then_err_recovers(self):
        """then_err on Err returns next(error)."""
        assert Err('missing').then_err(lambda e: Ok(0)) == Ok(0)
        assert Err('missing').then_err(lambda e: Err(e.upper())) == Err('MISSING')

    def test_then_err_passes_ok_through(self):
        """then_err on Ok returns the Ok without calling next."""
        called = False

        def recover(e):
            nonlocal called
            called = True
            return Ok(0)

        assert Ok(7).then_err(recover) == Ok(7)
        assert called is False


class TestResultMap:
    """Tests for map() and map_err()."""

    def test_map_ok(self):
        """map transforms the Ok value."""
        assert Ok(5).map(lambda x: x * 2) == Ok(10)

    def test_map_err_passthrough(self):
        """map leaves Err untouched."""
        assert Err('error').map(lambda x: x * 2) == Err('error')

    def test_map_err_transforms(self):
        """map_err transforms the error."""
        assert Err('error').map_err(str.upper) == Err('ERROR')

    def test_map_err_leaves_ok(self):
        """map_err leaves Ok untouched."""
        assert Ok(5).map_err(str.upper) == Ok(5)

    def test_map_returns_new_instance(self):
        """map builds a new Result rather than mutating."""
        original = Ok([1])
        mapped = original.map(lambda xs: [*xs, 2])
        assert original == Ok([1])
        assert mapped == Ok([1, 2])


class TestResultExtraction:
    """Tests for value_or, unsafe_value, unsafe_error."""

    def test_value_or(self):
        """value_or returns the value or the fallback."""
        assert Ok(42).value_or(0) == 42
        assert Err('e').value_or(0) == 0

    def test_unsafe_value_ok(self):
        """unsafe_value returns the Ok payload."""
        assert Ok(42).unsafe_value() == 42

    def test_unsafe_error_err(self):
        """unsafe_error returns the Err payload."""
        assert Err('e').unsafe_error() == 'e'

    def test_unsafe_value_on_err_raises(self):
        """unsafe_value on Err raises a state violation naming Err."""
        with pytest.raises(InvalidResultStateError, match='Cannot access result value in `Err` state') as exc_info:
            Err('e').unsafe_value()
        assert exc_info.value.state is ResultState.ERR

    def test_unsafe_error_on_ok_raises(self):
        """unsafe_error on Ok raises a state violation naming Ok."""
        with pytest.raises(InvalidResultStateError, match='Cannot access result error in `Ok` state') as exc_info:
            Ok(1).unsafe_error()
        assert exc_info.value.state is ResultState.OK

    def test_state_error_has_code(self):
        """State violations carry a machine-readable code."""
        with pytest.raises(PResultError) as exc_info:
            Ok(1).unsafe_error()
        assert exc_info.value.code == 'invalid_state'
        assert str(exc_info.value).startswith('[invalid_state] ')


class TestResultTryPick:
    """Tests for try_pick_value and try_pick_error."""

    def test_try_pick_value_ok(self):
        """try_pick_value on Ok yields the value."""
        assert Ok(3).try_pick_value() == (True, 3, None)

    def test_try_pick_value_err(self):
        """try_pick_value on Err yields the error."""
        assert Err('e').try_pick_value() == (False, None, 'e')

    def test_try_pick_error_err(self):
        """try_pick_error on Err yields the error."""
        assert Err('e').try_pick_error() == (True, 'e', None)

    def test_try_pick_error_ok(self):
        """try_pick_error on Ok yields the value."""
        assert Ok(3).try_pick_error() == (False, None, 3)

    def test_unpacking_idiom(self):
        """The lookup tuple unpacks into a flag and both slots."""
        found, value, error = Ok('v').try_pick_value()
        assert found
        assert value == 'v'
        assert error is None


class TestToResult:
    """Tests for to_result coercion."""

    def test_bare_value_becomes_ok(self):
        """A plain value becomes Ok."""
        assert to_result(3) == Ok(3)
        assert to_result(None) == Ok(None)

    def test_exception_becomes_err(self):
        """An exception instance becomes Err."""
        exc = KeyError('id')
        assert to_result(exc) == Err(exc)

    def test_results_pass_through(self):
        """Existing Results are returned unchanged."""
        existing = Err('x')
        assert to_result(existing) is existing
        assert to_result(Ok(1)) == Ok(1)


class TestResultPatternMatching:
    """Tests for structural pattern matching on the variants."""

    def test_match_statement(self):
        """Ok and Err destructure in a match statement."""

        def describe(result: Result[int, str]) -> str:
            match result:
                case Ok(value):
                    return f'value {value}'
                case Err(error):
                    return f'error {error}'

        assert describe(Ok(1)) == 'value 1'
        assert describe(Err('x')) == 'error x'


class TestResultCopyAndCodec:
    """Tests for copying and repr."""

    def test_copy(self):
        """Results can be copied and stay equal."""
        original = Ok([1, 2])
        copied = copy.copy(original)
        assert copied == original

    def test_repr(self):
        """repr names the variant and its field."""
        assert repr(Ok(1)) == 'Ok(value=1)'
        assert repr(Err('e')) == "Err(error='e')"

    def test_json_roundtrip_shape(self):
        """Ok encodes as a struct with its payload."""
        assert msgspec.json.encode(Ok(1)) == b'{"value":1}'
        assert msgspec.json.encode(Err('e')) == b'{"error":"e"}'


class TestResultMonadLaws:
    """Property-based tests for monad laws."""

    @given(st.integers())
    def test_left_identity(self, value: int):
        """Left identity: ok(a).then(f) == f(a)."""

        def f(x: int) -> Ok[int] | Err[str]:
            return Ok(x * 2)

        assert ok(value).then(f) == f(value)

    @given(results)
    def test_right_identity(self, m):
        """Right identity: m.then(Ok) == m."""
        assert m.then(Ok) == m

    @given(st.integers())
    def test_associativity(self, value: int):
        """Associativity: m.then(f).then(g) == m.then(x => f(x).then(g))."""

        def f(x: int) -> Ok[int] | Err[str]:
            return Ok(x + 1) if x % 3 else Err('multiple of three')

        def g(x: int) -> Ok[str] | Err[str]:
            return Ok(str(x))

        m = Ok(value)
        assert m.then(f).then(g) == m.then(lambda x: f(x).then(g))

    @given(errors)
    def test_err_short_circuit(self, error):
        """Err(e).then(f) == Err(e) for any f."""
        assert Err(error).then(lambda x: Ok(x)) == Err(error)


class TestResultFunctorLaws:
    """Property-based tests for functor laws."""

    @given(results)
    def test_identity(self, m):
        """Identity: m.map(id) == m."""
        assert m.map(lambda x: x) == m

    @given(st.integers(), int_functions, int_functions)
    def test_composition(self, value: int, f, g):
        """Composition: m.map(f).map(g) == m.map(g . f)."""
        m = Ok(value)
        assert m.map(f).map(g) == m.map(lambda x: g(f(x)))

    @given(st.integers(), int_functions)
    def test_map_is_then_ok(self, value: int, f):
        """map(f) == then(v => Ok(f(v)))."""
        assert Ok(value).map(f) == Ok(value).then(lambda v: Ok(f(v)))

    @given(payloads, int_functions)
    def test_map_err_leaves_ok(self, value, f):
        """Ok(v).map_err(f) == Ok(v)."""
        assert Ok(value).map_err(f) == Ok(value)


class TestResultFixtures:
    """Tests using the shared sample fixtures."""

    def test_sample_ok(self, sample_ok):
        """The Ok fixture survives a full chain."""
        assert sample_ok.map(lambda x: x + 1).then(lambda x: Ok(x * 2)).value_or(0) == 86

    def test_sample_err(self, sample_err):
        """The Err fixture carries its exception through every combinator."""
        chained = sample_err.map(lambda x: x + 1).then(lambda x: Ok(x))
        assert chained is sample_err
        assert chained.match(lambda v: None, lambda e: str(e)) == 'test error'
