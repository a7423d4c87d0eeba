import json
import tempfile
import unittest
from pathlib import Path

from scripts.generate_fixtures import build_fixture, main


class TestGenerateFixtures(unittest.TestCase):

    def test_build_fixture(self):
        fx = build_fixture("sample1.jpg", "karachi")
        self.assertEqual(fx["hash"], 108693818)
        self.assertEqual(fx["seed"], 818)
        self.assertEqual(fx["classification"], "Unsafe")
        self.assertEqual(len(fx["indicators"]), 4)

    def test_main_writes_json(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_path = Path(tmp) / "nested" / "fixtures.json"
            main(["flood_photo.png", "--district", "dadu", "--out", str(out_path)])
            data = json.loads(out_path.read_text(encoding="utf-8"))
        self.assertEqual(data["district"], "dadu")
        self.assertEqual(data["fixtures"][0]["classification"], "Clean")
        self.assertEqual(data["fixtures"][0]["seed"], 292)


if __name__ == '__main__':
    unittest.main()
