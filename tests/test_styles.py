import unittest

from styles import DEFAULT_STYLES, StyleError, merge_styles, validate_styles


class TestStyles(unittest.TestCase):
    def test_defaults_are_valid(self) -> None:
        styles = merge_styles()
        self.assertEqual(styles, DEFAULT_STYLES)
        self.assertIsNot(styles["red"], DEFAULT_STYLES["red"])

    def test_override_merges_and_tuples_fonts(self) -> None:
        styles = merge_styles({"red": {"fg": "orange", "font": ["DejaVu Sans", -48, "bold"]}})
        self.assertEqual(styles["red"]["fg"], "orange")
        self.assertEqual(styles["red"]["font"], ("DejaVu Sans", -48, "bold"))
        self.assertEqual(styles["blue"], DEFAULT_STYLES["blue"])

    def test_partial_override_keeps_other_keys(self) -> None:
        styles = merge_styles({"clock": {"fg": "yellow"}})
        self.assertEqual(styles["clock"]["font"], DEFAULT_STYLES["clock"]["font"])

    def test_bad_font_size_names_the_entry(self) -> None:
        with self.assertRaises(StyleError) as cm:
            merge_styles({"day": {"font": ["terminal", "big"]}})
        self.assertIn("styles.day.font", str(cm.exception))

    def test_unknown_key_rejected(self) -> None:
        with self.assertRaisesRegex(StyleError, r"styles\.button: unknown keys \['colour'\]"):
            merge_styles({"button": {"colour": "red"}})

    def test_non_object_style_rejected(self) -> None:
        with self.assertRaisesRegex(StyleError, r"styles\.red: expected an object"):
            merge_styles({"red": "red"})

    def test_non_object_table_rejected(self) -> None:
        with self.assertRaises(StyleError):
            merge_styles(["red"])

    def test_missing_style_rejected(self) -> None:
        styles = dict(DEFAULT_STYLES)
        del styles["neutral"]
        with self.assertRaisesRegex(StyleError, r"styles\.neutral: missing"):
            validate_styles(styles)

    def test_label_needs_font(self) -> None:
        styles = dict(DEFAULT_STYLES)
        styles["extra"] = {"fg": "white"}
        with self.assertRaisesRegex(StyleError, r"styles\.extra\.font: missing"):
            validate_styles(styles)

    def test_empty_colour_rejected(self) -> None:
        with self.assertRaisesRegex(StyleError, r"styles\.window\.bg"):
            merge_styles({"window": {"bg": ""}})

    def test_negative_border_rejected(self) -> None:
        with self.assertRaisesRegex(StyleError, r"styles\.button\.border"):
            merge_styles({"button": {"border": -1}})


if __name__ == "__main__":
    unittest.main()
