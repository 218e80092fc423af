"""Tests for perch.routing.group — Group building and recursive composition."""

import pytest

from perch.errors import InvalidMemberError, InvalidMiddlewareError
from perch.routing.group import Group, split_members
from perch.routing.route import Routes, handle


def _patterns(routes: Routes) -> list[str]:
    return [route.pattern for route in routes]


class TestAdd:
    def test_single_route_and_group(self, endpoint) -> None:
        route = handle("/a", endpoint)
        sub = Group()
        group = Group().add(route, sub)
        assert group.routes == (route,)
        assert group.groups == (sub,)

    def test_collections(self, endpoint) -> None:
        routes = [handle("/a", endpoint), handle("/b", endpoint)]
        subs = (Group(), Group())
        group = Group().add(routes, subs, Routes([handle("/c", endpoint)]))
        assert _patterns(group.routes) == ["/a", "/b", "/c"]
        assert len(group.groups) == 2

    def test_empty_collection(self) -> None:
        assert Group().add([]) == Group()

    def test_returns_new_group(self, endpoint) -> None:
        base = Group()
        extended = base.add(handle("/a", endpoint))
        assert base.routes == ()
        assert len(extended.routes) == 1

    def test_branches_do_not_alias(self, endpoint) -> None:
        base = Group().add(handle("/shared", endpoint))
        left = base.add(handle("/left", endpoint))
        right = base.add(handle("/right", endpoint))
        assert _patterns(left.routes) == ["/shared", "/left"]
        assert _patterns(right.routes) == ["/shared", "/right"]

    def test_raw_string_points_to_handle(self) -> None:
        with pytest.raises(InvalidMemberError, match=r"handle\(\)"):
            Group().add("/users")

    def test_bare_function_points_to_handle(self, endpoint) -> None:
        with pytest.raises(InvalidMemberError, match=r"handle\(\)"):
            Group().add(endpoint)

    @pytest.mark.parametrize("value", [42, None, {"/": "x"}, 1.5])
    def test_unknown_type(self, value) -> None:
        with pytest.raises(InvalidMemberError, match=f"unknown type: {type(value).__name__}"):
            Group().add(value)

    def test_mixed_collection(self, endpoint) -> None:
        with pytest.raises(InvalidMemberError, match="only Groups or only Routes"):
            Group().add([handle("/a", endpoint), Group()])

    def test_collection_with_strings(self) -> None:
        with pytest.raises(InvalidMemberError, match="str"):
            Group().add(["/a", "/b"])

    def test_nothing_added_on_error(self, endpoint) -> None:
        group = Group()
        with pytest.raises(InvalidMemberError):
            group.add(handle("/a", endpoint), "/b")
        assert group.routes == ()


class TestSplitMembers:
    def test_preserves_order_within_kind(self, endpoint) -> None:
        r1, r2 = handle("/1", endpoint), handle("/2", endpoint)
        g1, g2 = Group(), Group().add(r1)
        groups, routes = split_members([r1, g1, [r2], g2])
        assert routes == (r1, r2)
        assert groups == (g1, g2)


class TestWrap:
    def test_appends_to_own_middleware(self, tracer) -> None:
        m1, m2 = tracer("m1"), tracer("m2")
        group = Group().wrap(m1).wrap(m2)
        assert group.middleware == (m1, m2)

    def test_does_not_touch_members(self, tracer, endpoint) -> None:
        route = handle("/a", endpoint)
        sub = Group().add(route)
        group = Group().add(route, sub).wrap(tracer("m"))
        assert group.routes[0] is route
        assert group.groups[0] is sub
        assert sub.middleware == ()

    def test_rejects_non_callable(self) -> None:
        with pytest.raises(InvalidMiddlewareError):
            Group().wrap(42)


class TestCompose:
    def test_direct_routes_before_sub_groups(self, endpoint) -> None:
        group = Group().add(
            Group().add(handle("/s1a", endpoint), handle("/s1b", endpoint)),
            handle("/r1", endpoint),
            Group().add(handle("/s2", endpoint)),
            handle("/r2", endpoint),
        )
        assert _patterns(group.compose()) == ["/r1", "/r2", "/s1a", "/s1b", "/s2"]

    def test_nested_flattening(self, endpoint) -> None:
        leaf = Group().add(handle("/deep", endpoint))
        middle = Group().add(leaf, handle("/middle", endpoint))
        top = Group().add(middle, handle("/top", endpoint))
        assert _patterns(top.compose()) == ["/top", "/middle", "/deep"]

    def test_returns_routes(self) -> None:
        assert isinstance(Group().compose(), Routes)
        assert Group().compose() == ()

    @pytest.mark.asyncio
    async def test_group_middleware_wraps_outside_route_middleware(
        self, make_request, calls, tracer, endpoint
    ) -> None:
        group = Group().add(handle("/", endpoint, tracer("route"))).wrap(tracer("g1"), tracer("g2"))
        (route,) = group.compose()
        await route.handler(make_request())
        assert calls == ["g2>", "g1>", "route>", "h", "<route", "<g1", "<g2"]

    @pytest.mark.asyncio
    async def test_nesting_levels_accumulate(self, make_request, calls, tracer, endpoint) -> None:
        inner = Group().add(handle("/", endpoint, tracer("route"))).wrap(tracer("inner"))
        outer = Group().add(inner).wrap(tracer("outer"))
        (route,) = outer.compose()
        await route.handler(make_request())
        assert calls == ["outer>", "inner>", "route>", "h", "<route", "<inner", "<outer"]

    @pytest.mark.asyncio
    async def test_sibling_middleware_does_not_leak(self, make_request, calls, tracer, endpoint) -> None:
        left = Group().add(handle("/left", endpoint)).wrap(tracer("left"))
        right = Group().add(handle("/right", endpoint)).wrap(tracer("right"))
        routes = Group().add(left, right).compose()
        await routes[1].handler(make_request("/right"))
        assert calls == ["right>", "h", "<right"]

    def test_patterns_unchanged(self, tracer, endpoint) -> None:
        group = Group().add(handle("/x/", endpoint)).wrap(tracer("m"))
        assert _patterns(group.compose()) == ["/x/"]

    @pytest.mark.asyncio
    async def test_compose_is_pure(self, make_request, calls, tracer, endpoint) -> None:
        route = handle("/", endpoint)
        sub = Group().add(handle("/sub", endpoint)).wrap(tracer("sub"))
        group = Group().add(route, sub).wrap(tracer("g"))

        first = group.compose()
        second = group.compose()

        assert _patterns(first) == _patterns(second)
        assert group.routes == (route,)
        assert group.groups == (sub,)
        assert sub.routes[0].pattern == "/sub"

        await first[1].handler(make_request("/sub"))
        first_calls = list(calls)
        calls.clear()
        await second[1].handler(make_request("/sub"))
        assert first_calls == calls == ["g>", "sub>", "h", "<sub", "<g"]

    @pytest.mark.asyncio
    async def test_shared_sub_group_wrapped_per_parent(self, make_request, calls, tracer, endpoint) -> None:
        shared = Group().add(handle("/shared", endpoint))
        a = Group().add(shared).wrap(tracer("a"))
        b = Group().add(shared).wrap(tracer("b"))
        await a.compose()[0].handler(make_request("/shared"))
        await b.compose()[0].handler(make_request("/shared"))
        assert calls == ["a>", "h", "<a", "b>", "h", "<b"]
