# Copyright 2016-2024, Pulumi Corporation.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import asyncio
import unittest

import webappstack
from webappstack import Output, Stack
from webappstack.output import collect_resources
from webappstack.runtime import MockProvider, settings

from helpers import RecordingMocks, Thing


class OutputSecretTests(unittest.TestCase):
    @webappstack.runtime.test
    async def test_secret(self):
        x = Output.secret("foo")
        self.assertTrue(await x.is_secret())

    @webappstack.runtime.test
    async def test_unsecret(self):
        x = Output.secret("foo")
        y = Output.unsecret(x)
        self.assertEqual("foo", await y.future())
        self.assertFalse(await y.is_secret())

    @webappstack.runtime.test
    async def test_secret_propagates_through_apply(self):
        x = Output.secret("https://blob").apply(lambda url: url + "?sig")
        self.assertEqual("https://blob?sig", await x.future())
        self.assertTrue(await x.is_secret())

    @webappstack.runtime.test
    async def test_secret_propagates_through_all(self):
        x = Output.all(Output.from_input("a"), Output.secret("b"))
        self.assertEqual(["a", "b"], await x.future())
        self.assertTrue(await x.is_secret())


class OutputFromInputTests(unittest.TestCase):
    @webappstack.runtime.test
    async def test_prompt(self):
        x = Output.from_input("hello")
        self.assertEqual("hello", await x.future())
        self.assertEqual(set(), x.resources())

    @webappstack.runtime.test
    async def test_awaitable(self):
        async def value():
            return 42

        x = Output.from_input(value())
        self.assertEqual(42, await x.future())

    @webappstack.runtime.test
    async def test_deep_unwrap(self):
        x = Output.from_input(
            {
                "app_settings": {"WEBSITE_RUN_FROM_ZIP": Output.from_input("@ref")},
                "permissions": [Output.from_input("get"), "list"],
            }
        )
        self.assertEqual(
            {"app_settings": {"WEBSITE_RUN_FROM_ZIP": "@ref"}, "permissions": ["get", "list"]},
            await x.future(),
        )

    @webappstack.runtime.test
    async def test_apply_returning_output(self):
        x = Output.from_input(1).apply(lambda v: Output.secret(v + 1))
        self.assertEqual(2, await x.future())
        self.assertTrue(await x.is_secret())


class OutputOperatorTests(unittest.TestCase):
    @webappstack.runtime.test
    async def test_getattr_and_getitem(self):
        class Config:
            tenant_id = "tenant"

        self.assertEqual("tenant", await Output.from_input(Config()).tenant_id.future())
        self.assertEqual("id", await Output.from_input({"principal_id": "id"})["principal_id"].future())

    @webappstack.runtime.test
    async def test_not_iterable(self):
        with self.assertRaises(TypeError):
            list(Output.from_input([1, 2]))

    @webappstack.runtime.test
    async def test_concat_and_format(self):
        self.assertEqual("https://myapp", await Output.concat("https://", Output.from_input("myapp")).future())
        self.assertEqual(
            "a/b/c",
            await Output.format("{}/{}/{x}", "a", Output.from_input("b"), x=Output.from_input("c")).future(),
        )

    @webappstack.runtime.test
    async def test_all_kwargs(self):
        x = Output.all(a=Output.from_input(1), b=2)
        self.assertEqual({"a": 1, "b": 2}, await x.future())

    def test_all_rejects_mixed_inputs(self):
        async def run():
            Output.all(1, b=2)

        with self.assertRaises(ValueError):
            asyncio.run(run())


@webappstack.runtime.test
async def test_resources_are_known_before_materialization():
    mocks = RecordingMocks()
    provider = MockProvider(mocks)
    seen = {}

    def define():
        a = Thing("a", "x")
        b = Thing("b", "y")
        joined = Output.all(a.value, b.value).apply(lambda vs: "-".join(vs))
        derived = joined.apply(str.upper)
        # Nothing has been submitted yet, but the contributing resources are already known.
        seen["events"] = list(mocks.events)
        seen["joined"] = joined.resources()
        seen["derived"] = derived.resources()
        seen["nested"] = collect_resources({"k": [derived], "other": "literal"})
        seen["a"], seen["b"] = a, b
        seen["value"] = derived

    result = await Stack().run(define, provider)

    assert result.succeeded
    assert seen["events"] == []
    assert seen["joined"] == {seen["a"], seen["b"]}
    assert seen["derived"] == {seen["a"], seen["b"]}
    assert seen["nested"] == {seen["a"], seen["b"]}
    assert await seen["value"].future() == "X-Y"


@webappstack.runtime.test
async def test_outputs_are_tracked_by_the_stack_being_declared():
    stack = Stack()
    token = settings.set_root_stack(stack)
    try:
        x = Output.from_input("tracked")
    finally:
        settings.reset_root_stack(token)
    assert x._data in stack._outputs
    assert "not supported" in str(x)
