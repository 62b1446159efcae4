import unittest
from benchbuilder import template_renderer
from benchbuilder.template_renderer import render, load_template, list_templates


class TestRender(unittest.TestCase):

    def test_every_known_placeholder_is_replaced(self):
        template = " ".join(template_renderer.PLACEHOLDERS)
        substitutions = {p: p.strip("$").lower() for p in template_renderer.PLACEHOLDERS}

        result = render(template, substitutions)

        self.assertEqual(result, " ".join(p.strip("$").lower() for p in template_renderer.PLACEHOLDERS))
        self.assertNotIn("$", result)

    def test_unknown_tokens_pass_through(self):
        result = render("$UNKNOWN$ $TFM$ $(Configuration)", {template_renderer.TFM: "net8.0"})

        self.assertEqual(result, "$UNKNOWN$ net8.0 $(Configuration)")

    def test_substituted_values_are_not_rescanned(self):
        result = render("$CSPROJPATH$|$TFM$", {
            template_renderer.CSPROJ_PATH: "/odd/$TFM$/Bench.csproj",
            template_renderer.TFM: "net8.0",
        })

        self.assertEqual(result, "/odd/$TFM$/Bench.csproj|net8.0")

    def test_repeated_placeholder_is_replaced_everywhere(self):
        result = render("$PROGRAMNAME$-$PROGRAMNAME$", {template_renderer.PROGRAM_NAME: "Prog"})

        self.assertEqual(result, "Prog-Prog")

    def test_placeholders_are_case_sensitive(self):
        self.assertEqual(render("$tfm$", {template_renderer.TFM: "net8.0"}), "$tfm$")

    def test_unknown_substitution_key_raises(self):
        with self.assertRaises(KeyError):
            render("$TFM$", {"$NOPE$": "x"})


class TestTemplateStore(unittest.TestCase):

    def test_csproj_template_is_packaged(self):
        self.assertIn(template_renderer.CSPROJ_TEMPLATE, list_templates())
        template = load_template(template_renderer.CSPROJ_TEMPLATE)
        for placeholder in template_renderer.PLACEHOLDERS:
            self.assertIn(placeholder, template)

    def test_missing_template_raises(self):
        with self.assertRaises(FileNotFoundError):
            load_template("NoSuchTemplate.txt")


if __name__ == "__main__":
    unittest.main()
