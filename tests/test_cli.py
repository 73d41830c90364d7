import io
import json
import os
import sys
import tempfile
import unittest
from contextlib import redirect_stdout

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from article_epub.main import cli_main
from article_epub.manifest import load_manifest
from article_epub.models import ErrorKind, ErrorRecord, ResultsTable
from article_epub.summary import display_summary, render_summary


class ManifestTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.dir = self._tmp.name

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _write(self, name: str, content: str) -> str:
        path = os.path.join(self.dir, name)
        with open(path, "w", encoding="utf-8") as f:
            f.write(content)
        return path

    def test_loads_articles(self) -> None:
        self._write("a.html", "<html><body><h1>Title</h1><p>Body</p></body></html>")
        manifest = self._write(
            "manifest.json",
            json.dumps(
                [
                    {
                        "url": "https://example.com/a",
                        "title": "A",
                        "byline": "Someone",
                        "html": "a.html",
                        "images": [["one.png", "image/png"], ["two.jpg"], "three.gif"],
                    }
                ]
            ),
        )
        articles = load_manifest(manifest)
        self.assertEqual(len(articles), 1)
        article = articles[0]
        self.assertEqual(article.url, "https://example.com/a")
        self.assertEqual(article.metadata.title, "A")
        self.assertEqual(article.metadata.byline, "Someone")
        self.assertEqual(article.document.h1.get_text(), "Title")
        self.assertEqual(article.images, [("one.png", "image/png"), ("two.jpg", None), ("three.gif", None)])

    def test_rejects_entries_without_html(self) -> None:
        manifest = self._write("manifest.json", json.dumps([{"url": "https://example.com/a"}]))
        with self.assertRaises(ValueError):
            load_manifest(manifest)

    def test_rejects_invalid_json(self) -> None:
        manifest = self._write("manifest.json", "{not json")
        with self.assertRaises(ValueError):
            load_manifest(manifest)


class SummaryTests(unittest.TestCase):
    def test_summary_lists_rows_and_errors(self) -> None:
        table = ResultsTable(header="Downloaded articles", rows=["Good"])
        errors = [ErrorRecord("https://example.com/bad", ErrorKind.CONTENT_SERIALIZATION, "boom")]
        text = render_summary(2, table, errors)
        self.assertIn("Downloaded articles", text)
        self.assertIn("| Good", text)
        self.assertIn("Generated 1/2 articles", text)
        self.assertIn("https://example.com/bad: ContentSerializationError: boom", text)

    def test_exit_status_reflects_errors(self) -> None:
        lines = []
        self.assertEqual(display_summary(1, ResultsTable(rows=["x"]), [], print_fn=lines.append), 0)
        errors = [ErrorRecord("bundle.epub", ErrorKind.FINALIZE)]
        self.assertEqual(display_summary(1, ResultsTable(), errors, print_fn=lines.append), 1)
        self.assertEqual(len(lines), 2)


class CliTests(unittest.TestCase):
    def test_generates_merged_epub(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with open(os.path.join(tmp, "a.html"), "w", encoding="utf-8") as f:
                f.write("<html><body><h1>Heading</h1><p>Text</p></body></html>")
            manifest = os.path.join(tmp, "manifest.json")
            with open(manifest, "w", encoding="utf-8") as f:
                json.dump([{"url": "https://example.com/a", "title": "A", "html": "a.html"}], f)
            out_dir = os.path.join(tmp, "out")

            with redirect_stdout(io.StringIO()):
                status = cli_main([manifest, "--merge", "all.epub", "--output-dir", out_dir, "--no-progress"])

            self.assertEqual(status, 0)
            self.assertTrue(os.path.isfile(os.path.join(out_dir, "all.epub")))

    def test_missing_manifest_fails(self) -> None:
        with redirect_stdout(io.StringIO()):
            status = cli_main([os.path.join(tempfile.gettempdir(), "does-not-exist-manifest.json")])
        self.assertEqual(status, 1)


if __name__ == "__main__":
    unittest.main()
