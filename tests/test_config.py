import tempfile
import unittest
from pathlib import Path

from hostsan.config import HostsanConfig
from hostsan.pipeline import FilterPolicy


class HostsanConfigTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self.tmp.cleanup)

    def _write(self, text):
        path = Path(self.tmp.name) / "hostsan.yaml"
        path.write_text(text, encoding="utf-8")
        return str(path)

    def test_defaults(self):
        config = HostsanConfig.default()
        self.assertEqual(config.suffix_lists.sources, [])
        self.assertTrue(config.suffix_lists.include_defaults)
        self.assertEqual(config.suffix_lists.max_age, 72 * 3600)
        self.assertEqual(config.filter, FilterPolicy())

    def test_from_yaml(self):
        path = self._write(
            "suffix_lists:\n"
            "  sources: [/etc/hostsan/internal.dat]\n"
            "  include_defaults: false\n"
            "  cache_dir: /var/cache/hostsan\n"
            "  max_age_hours: 24\n"
            "filter:\n"
            "  keep_ip: true\n"
        )
        config = HostsanConfig.from_yaml(path)

        self.assertEqual(config.suffix_lists.sources, ["/etc/hostsan/internal.dat"])
        self.assertFalse(config.suffix_lists.include_defaults)
        self.assertEqual(config.suffix_lists.cache_dir, "/var/cache/hostsan")
        self.assertEqual(config.suffix_lists.max_age, 24 * 3600)
        self.assertEqual(config.filter, FilterPolicy(keep_ip=True, keep_unknown_suffix=False))

    def test_empty_file_gives_defaults(self):
        config = HostsanConfig.from_yaml(self._write(""))
        self.assertEqual(config, HostsanConfig.default())

    def test_missing_file(self):
        with self.assertRaises(FileNotFoundError):
            HostsanConfig.from_yaml(str(Path(self.tmp.name) / "nope.yaml"))


if __name__ == "__main__":
    unittest.main()
