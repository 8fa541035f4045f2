from django_lazyload.hooks import LazyloadHooks
from django_lazyload.transformer import (
    FRAME_PLACEHOLDER,
    AttributeTransformer,
    TagCategory,
    get_default_placeholder,
    get_tag_category,
    search_id_in_classes,
    search_size_in_classes,
    transform_attrs,
)

# isort: off
from .django_test_setup import setup_test_config
from .testutils import GIF, BaseTestCase

# isort: on

setup_test_config()


class RecordingHooks(LazyloadHooks):
    def __init__(self):
        self.calls = []

    def should_lazyload(self, attrs, tag_name, attachment_id, size):
        self.calls.append((tag_name, attachment_id, size))
        return True


class HelpersTest(BaseTestCase):
    def test_tag_category(self):
        self.assertEqual(get_tag_category("img"), TagCategory.IMAGE)
        self.assertEqual(get_tag_category("video"), TagCategory.IMAGE)
        self.assertEqual(get_tag_category("iframe"), TagCategory.FRAME)
        self.assertEqual(get_tag_category("FRAME"), TagCategory.FRAME)

    def test_default_placeholder(self):
        self.assertEqual(get_default_placeholder("img"), GIF)
        self.assertEqual(get_default_placeholder("iframe"), FRAME_PLACEHOLDER)
        self.assertEqual(FRAME_PLACEHOLDER, "about:blank")

    def test_search_id_in_classes(self):
        self.assertEqual(search_id_in_classes(["alignleft", "wp-image-123"]), 123)
        self.assertEqual(search_id_in_classes(["wp-image-1", "wp-image-2"]), 1)
        self.assertIsNone(search_id_in_classes(["wp-image-", "wp-image-x", "my-wp-image-5"]))

    def test_search_size_in_classes(self):
        self.assertEqual(search_size_in_classes(["alignleft", "size-large"]), "large")
        self.assertEqual(search_size_in_classes(["size-medium", "size-large"]), "medium")
        self.assertIsNone(search_size_in_classes(["size-", "fullsize"]))


class TransformTest(BaseTestCase):
    def test_defers_src(self):
        result = transform_attrs({"src": "a.jpg", "alt": "A"}, "img", options={})

        self.assertEqual(
            result,
            {"src": GIF, "alt": "A", "data-src": "a.jpg", "class": "lazyload"},
        )
        self.assertEqual(list(result.keys()), ["src", "alt", "data-src", "class"])

    def test_attachment_class_and_inferred_id(self):
        hooks = RecordingHooks()
        result = transform_attrs(
            {"src": "a.jpg", "class": "wp-image-5 size-large"},
            "img",
            options={"attachments": True},
            hooks=hooks,
        )

        self.assertEqual(result["data-src"], "a.jpg")
        self.assertEqual(result["src"], GIF)
        self.assertEqual(result["class"], "wp-image-5 size-large lazyload")
        self.assertEqual(hooks.calls, [("img", 5, "large")])

    def test_explicit_id_and_size_win_over_classes(self):
        hooks = RecordingHooks()
        transform_attrs(
            {"src": "a.jpg", "class": "wp-image-5 size-large"},
            "img",
            attachment_id=7,
            size=(100, 50),
            options={},
            hooks=hooks,
        )
        self.assertEqual(hooks.calls, [("img", 7, (100, 50))])

    def test_defers_srcset(self):
        result = transform_attrs(
            {"src": "a.jpg", "srcset": "a.jpg 1x, b.jpg 2x", "sizes": "100vw"},
            "img",
            options={"data-sizes": True},
        )

        self.assertEqual(
            result,
            {
                "src": "a.jpg",
                "srcset": GIF,
                "data-srcset": "a.jpg 1x, b.jpg 2x",
                "data-sizes": "auto",
                "class": "lazyload",
            },
        )
        self.assertNotIn("sizes", result)
        self.assertNotIn("data-src", result)

    def test_srcset_keeps_sizes_without_data_sizes(self):
        result = transform_attrs(
            {"srcset": "a.jpg 1x", "sizes": "100vw"},
            "img",
            options={"data-sizes": False},
        )

        self.assertEqual(result["sizes"], "100vw")
        self.assertNotIn("data-sizes", result)

    def test_src_drops_sizes(self):
        result = transform_attrs({"src": "a.jpg", "sizes": "100vw"}, "img", options={})
        self.assertNotIn("sizes", result)
        self.assertNotIn("data-sizes", result)

    def test_skip_class_names(self):
        attrs = {"src": "a.jpg", "class": "foo noLazy"}
        result = transform_attrs(attrs, "img", options={"skip_class_names": "noLazy other"})
        self.assertEqual(result, attrs)

    def test_skip_class_names_match_whole_tokens(self):
        result = transform_attrs(
            {"src": "a.jpg", "class": "noLazyPlease"},
            "img",
            options={"skip_class_names": "noLazy"},
        )
        self.assertEqual(result["data-src"], "a.jpg")

    def test_iframe(self):
        result = transform_attrs({"src": "https://x.test/embed"}, "iframe", options={})

        self.assertEqual(result["src"], "about:blank")
        self.assertEqual(result["data-src"], "https://x.test/embed")
        self.assertEqual(result["class"], "lazyload")

    def test_tag_name_is_case_insensitive(self):
        result = transform_attrs({"src": "https://x.test/embed"}, "IFRAME", options={})
        self.assertEqual(result["src"], "about:blank")

    def test_already_deferred_is_unchanged(self):
        attrs = {"data-src": "already.jpg", "class": "lazyload"}
        self.assertEqual(transform_attrs(attrs, "img", options={}), attrs)

        attrs = {"srcset": GIF, "data-srcset": "a.jpg 1x", "class": "lazyload"}
        self.assertEqual(transform_attrs(attrs, "img", options={}), attrs)

    def test_already_deferred_gets_aspectratio(self):
        result = transform_attrs(
            {"data-src": "a.jpg", "width": "100", "height": "50"},
            "img",
            options={"aspectratio": True},
        )
        self.assertEqual(
            result,
            {"data-src": "a.jpg", "width": "100", "height": "50", "data-aspectratio": "100/50"},
        )

    def test_processed_by_other_handler_is_unchanged(self):
        attrs = {"src": "a.jpg", "data-gaussholder": "xyz", "width": "100", "height": "50"}
        self.assertEqual(transform_attrs(attrs, "img", options={"aspectratio": True}), attrs)

    def test_aspectratio(self):
        result = transform_attrs(
            {"src": "a.jpg", "width": "100", "height": "50"},
            "img",
            options={"aspectratio": True},
        )

        self.assertEqual(result["data-aspectratio"], "100/50")
        self.assertEqual(
            list(result.keys()),
            ["src", "width", "height", "data-src", "data-aspectratio", "class"],
        )

    def test_aspectratio_off_by_default(self):
        result = transform_attrs({"src": "a.jpg", "width": "100", "height": "50"}, "img", options={})
        self.assertNotIn("data-aspectratio", result)

    def test_aspectratio_needs_both_dimensions(self):
        for attrs in [
            {"src": "a.jpg", "width": "100", "height": "0"},
            {"src": "a.jpg", "width": "0", "height": "50"},
            {"src": "a.jpg", "width": "100"},
            {"src": "a.jpg", "width": "auto", "height": "50"},
        ]:
            with self.subTest(attrs=attrs):
                result = transform_attrs(attrs, "img", options={"aspectratio": True})
                self.assertNotIn("data-aspectratio", result)
                self.assertEqual(result["data-src"], "a.jpg")

    def test_aspectratio_reads_leading_digits(self):
        result = transform_attrs(
            {"src": "a.jpg", "width": "640px", "height": " 480.5"},
            "img",
            options={"aspectratio": True},
        )
        self.assertEqual(result["data-aspectratio"], "640/480")

    def test_existing_aspectratio_is_kept(self):
        result = transform_attrs(
            {"src": "a.jpg", "width": "100", "height": "50", "data-aspectratio": "2/1"},
            "img",
            options={"aspectratio": True},
        )
        self.assertEqual(result["data-aspectratio"], "2/1")

    def test_native_loading(self):
        result = transform_attrs({"src": "a.jpg"}, "img", options={"native-loading": True})
        self.assertEqual(result["loading"], "lazy")

        result = transform_attrs({"src": "a.jpg", "loading": "eager"}, "img", options={"native-loading": True})
        self.assertEqual(result["loading"], "lazy")

    def test_native_loading_off_removes_loading(self):
        result = transform_attrs({"src": "a.jpg", "loading": "lazy"}, "img", options={})
        self.assertNotIn("loading", result)

    def test_no_source_is_unchanged(self):
        for attrs in [{"alt": "A"}, {"src": ""}, {"srcset": "", "class": "x"}, {}]:
            with self.subTest(attrs=attrs):
                self.assertEqual(transform_attrs(attrs, "img", options={}), attrs)

    def test_existing_trigger_class_is_not_duplicated(self):
        result = transform_attrs({"src": "a.jpg", "class": "lazyload foo"}, "img", options={})
        self.assertEqual(result["class"], "lazyload foo")

    def test_does_not_modify_input(self):
        attrs = {"src": "a.jpg", "sizes": "100vw", "loading": "lazy"}
        transform_attrs(attrs, "img", options={})
        self.assertEqual(attrs, {"src": "a.jpg", "sizes": "100vw", "loading": "lazy"})

    def test_positional_entries_are_kept(self):
        result = transform_attrs({0: "foo", "src": "a.jpg"}, "img", options={})
        self.assertEqual(result[0], "foo")
        self.assertEqual(result["data-src"], "a.jpg")

    def test_string_option_values(self):
        transformer = AttributeTransformer({"aspectratio": "1", "native-loading": "0", "data-sizes": "false"})
        result = transformer.transform(
            {"srcset": "a.jpg 1x", "sizes": "100vw", "width": "4", "height": "3", "loading": "lazy"},
            "img",
        )

        self.assertEqual(result["data-aspectratio"], "4/3")
        self.assertNotIn("loading", result)
        self.assertEqual(result["sizes"], "100vw")
