from django.test import override_settings

from django_lazyload.hooks import InternalHooks, LazyloadHooks, default_hooks, get_hooks
from django_lazyload.transformer import transform_attrs

# isort: off
from .django_test_setup import setup_test_config
from .testutils import GIF, BaseTestCase

# isort: on

setup_test_config()


class SkipLogoHooks(LazyloadHooks):
    def should_lazyload(self, attrs, tag_name, attachment_id, size):
        return attrs.get("id") != "logo"


class CustomHooks(LazyloadHooks):
    def placeholder(self, placeholder, tag_name, attachment_id, size):
        if tag_name == "img":
            return f"/static/blank-{attachment_id}.svg"
        return placeholder

    def trigger_class(self, class_name, tag_name, attachment_id, size):
        return "js-lazy"

    def filter_attrs(self, attrs, tag_name, attachment_id, size):
        return {**attrs, "data-expand": -10}


class BrokenHooks(LazyloadHooks):
    def should_lazyload(self, attrs, tag_name, attachment_id, size):
        attrs["src"] = "mutated.jpg"
        return 1

    def placeholder(self, placeholder, tag_name, attachment_id, size):
        return None

    def trigger_class(self, class_name, tag_name, attachment_id, size):
        return "<>"

    def filter_attrs(self, attrs, tag_name, attachment_id, size):
        return ["not", "a", "dict"]


class RaisingHooks(LazyloadHooks):
    def should_lazyload(self, attrs, tag_name, attachment_id, size):
        raise RuntimeError("boom")


class HooksTest(BaseTestCase):
    def test_veto(self):
        attrs = {"src": "logo.png", "id": "logo"}
        self.assertEqual(transform_attrs(attrs, "img", options={}, hooks=SkipLogoHooks), attrs)

        result = transform_attrs({"src": "a.jpg", "id": "other"}, "img", options={}, hooks=SkipLogoHooks)
        self.assertEqual(result["data-src"], "a.jpg")

    def test_custom_hooks(self):
        result = transform_attrs({"src": "a.jpg"}, "img", attachment_id=3, options={}, hooks=CustomHooks())

        self.assertEqual(
            result,
            {"src": "/static/blank-3.svg", "data-src": "a.jpg", "class": "js-lazy", "data-expand": "-10"},
        )

    def test_custom_placeholder_only_for_img(self):
        result = transform_attrs({"src": "https://x.test"}, "iframe", options={}, hooks=CustomHooks())
        self.assertEqual(result["src"], "about:blank")

    def test_invalid_hook_results_are_ignored(self):
        with self.assertLogs("django_lazyload", level="WARNING") as logs:
            result = transform_attrs({"src": "a.jpg"}, "img", options={}, hooks=BrokenHooks)

        self.assertEqual(result, {"src": GIF, "data-src": "a.jpg", "class": "lazyload"})
        self.assertEqual(len(logs.records), 3)
        self.assertIn("placeholder()", logs.output[0])
        self.assertIn("trigger_class()", logs.output[1])
        self.assertIn("filter_attrs()", logs.output[2])

    def test_hook_exceptions_propagate(self):
        with self.assertRaisesMessage(RuntimeError, "boom"):
            transform_attrs({"src": "a.jpg"}, "img", options={}, hooks=RaisingHooks)

    def test_filter_attrs_result_is_coerced(self):
        class Hooks(LazyloadHooks):
            def filter_attrs(self, attrs, tag_name, attachment_id, size):
                return {**attrs, "width": 100, "title": None, True: "x", 1.5: "y"}

        with self.assertLogs("django_lazyload", level="WARNING"):
            result = transform_attrs({"src": "a.jpg"}, "img", options={}, hooks=Hooks)

        self.assertEqual(result["width"], "100")
        self.assertEqual(result["title"], "")
        self.assertNotIn(True, result)
        self.assertNotIn(1.5, result)


class GetHooksTest(BaseTestCase):
    def test_default(self):
        hooks = get_hooks()
        self.assertIsInstance(hooks, InternalHooks)
        self.assertIs(hooks.hooks, default_hooks)

    def test_from_class_instance_and_import_path(self):
        self.assertIsInstance(get_hooks(SkipLogoHooks).hooks, SkipLogoHooks)

        instance = SkipLogoHooks()
        self.assertIs(get_hooks(instance).hooks, instance)

        hooks = get_hooks("tests.test_hooks.SkipLogoHooks")
        self.assertEqual(type(hooks.hooks).__name__, "SkipLogoHooks")

    def test_wrapped_hooks_are_reused(self):
        hooks = get_hooks(SkipLogoHooks)
        self.assertIs(get_hooks(hooks), hooks)

    def test_invalid_hooks(self):
        with self.assertRaises(TypeError):
            get_hooks(object())
        with self.assertRaises(TypeError):
            get_hooks("django_lazyload.hooks.DEFAULT_TRIGGER_CLASS")

    @override_settings(LAZYLOAD={"hooks": "tests.test_hooks.SkipLogoHooks"})
    def test_from_settings(self):
        result = transform_attrs({"src": "logo.png", "id": "logo"}, "img")
        self.assertEqual(result, {"src": "logo.png", "id": "logo"})
