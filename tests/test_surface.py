from typing import Protocol, Self, TypeVar

import pytest

from deferpack.core import capability_surface, is_surface_type, surface_of
from deferpack.core.surface import SURFACE_CACHE_SIZE
from tests.fixtures.surfaces import Builder, RealRoot, Root, Writer

T = TypeVar("T")


class Box(Protocol[T]):
    def put(self, item: T) -> None: ...


class Shelf(Protocol):
    def box(self) -> Box[int]: ...

    def later(self) -> "Late": ...


class Late(Protocol):
    def done(self) -> None: ...


class Unannotated(Protocol):
    def go(self): ...


class Extended(Root, Protocol):
    def extra(self) -> None: ...


def test_protocol_operations_are_discovered_with_result_kinds() -> None:
    surface = surface_of(Root)

    assert surface.name == "Root"
    assert surface.type is Root
    assert set(surface.operations) == {"open", "a", "b", "install", "count"}
    assert surface.operation("open").result_kind == "chainable"
    assert surface.operation("install").result_kind == "void"
    assert surface.operation("count").result_kind == "unsupported"
    assert surface.operation("count").describe_result() == "int"


def test_chainable_result_resolves_to_result_surface() -> None:
    operation = surface_of(Root).operation("open")

    assert operation.result_surface().type is Writer
    assert "write" in operation.result_surface()


def test_self_result_chains_back_to_the_declaring_surface() -> None:
    operation = surface_of(Builder).operation("named")

    assert operation.result_kind == "chainable"
    assert operation.result_surface().type is Builder


def test_generic_and_forward_referenced_results_are_chainable() -> None:
    surface = surface_of(Shelf)

    assert surface.operation("box").result_surface().type is Box
    assert surface.operation("later").result_surface().type is Late


def test_signature_excludes_receiver() -> None:
    signature = surface_of(Root).operation("install").signature

    assert list(signature.parameters) == ["module", "eager"]
    signature.bind("plugin", eager=True)
    with pytest.raises(TypeError):
        signature.bind()


def test_unannotated_operation_is_unsupported() -> None:
    operation = surface_of(Unannotated).operation("go")

    assert operation.result_kind == "unsupported"
    assert operation.describe_result() == "<unannotated>"


def test_inherited_operations_are_part_of_the_surface() -> None:
    surface = surface_of(Extended)

    assert {"open", "install", "extra"} <= set(surface.operations)
    assert str(surface.operation("extra").selector) == "Extended.extra"


def test_plain_class_requires_explicit_marker() -> None:
    class Plain:
        def go(self) -> None:
            pass

    with pytest.raises(TypeError, match="not a capability surface"):
        surface_of(Plain)

    marked = capability_surface(Plain)
    assert surface_of(marked).operation("go").result_kind == "void"


def test_concrete_implementations_are_not_surfaces() -> None:
    assert is_surface_type(Root)
    assert is_surface_type(Box[int])
    assert not is_surface_type(Protocol)
    assert not is_surface_type(RealRoot)
    assert not is_surface_type(int)
    assert not is_surface_type("Root")


def test_unknown_operation_lists_available_names() -> None:
    with pytest.raises(AttributeError, match="available: flush, write"):
        surface_of(Writer).operation("close")


def test_unresolvable_annotation_is_reported_as_type_error() -> None:
    class Broken(Protocol):
        def go(self) -> "Missing": ...  # noqa: F821

    with pytest.raises(TypeError, match="Cannot resolve annotations of Broken.go"):
        surface_of(Broken)


def test_self_annotation_in_plain_marked_class() -> None:
    @capability_surface
    class Fluent:
        def again(self) -> Self:
            return self

    assert surface_of(Fluent).operation("again").result_surface().type is Fluent


def test_concrete_helper_bases_do_not_contribute_operations() -> None:
    class Helper:
        def render(self) -> None:
            pass

    @capability_surface
    class Panel(Helper):
        def show(self) -> None:
            pass

    assert set(surface_of(Panel).operations) == {"show"}


def test_marked_surface_bases_still_contribute_operations() -> None:
    @capability_surface
    class Base:
        def reset(self) -> None:
            pass

    @capability_surface
    class Derived(Base):
        def apply(self) -> None:
            pass

    assert set(surface_of(Derived).operations) == {"reset", "apply"}


def test_surface_cache_is_bounded() -> None:
    for _ in range(SURFACE_CACHE_SIZE + 8):

        @capability_surface
        class Throwaway:
            def go(self) -> None:
                pass

        surface_of(Throwaway)

    info = surface_of.cache_info()
    assert info.maxsize == SURFACE_CACHE_SIZE
    assert info.currsize <= SURFACE_CACHE_SIZE
