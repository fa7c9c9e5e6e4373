from __future__ import annotations

import json
from pathlib import Path
import tempfile
import unittest

import numpy as np

from scifile.file_io import CreateError, ParseCsvError
from scifile.interpolator import Interpolator, InvalidTableError
from scifile.table_io import interpolator_from_csv, load_interpolator, save_interpolator

DATA_DIR = Path(__file__).resolve().parent / "data"


class TestJsonTables(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.tmp = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def test_save_and_load(self) -> None:
        interp = Interpolator(x_vals=[1.0, 2.0, 3.0], y_vals=[[1.0, 0.0], [2.0, 0.5], [4.0, 1.0]])
        path = self.tmp / "table.json"
        save_interpolator(interp, path)
        self.assertEqual(set(json.loads(path.read_text(encoding="utf-8"))), {"x_vals", "y_vals"})
        loaded = load_interpolator(path)
        self.assertEqual(loaded, interp)
        x, y = loaded.interpolate(1.5)
        self.assertEqual(x, 2.0)
        np.testing.assert_array_equal(y, [1.5, 0.25])

    def test_load_existing_persisted_table(self) -> None:
        path = self.tmp / "persisted.json"
        path.write_text('{"x_vals": [1, 2, 3, 4, 5], "y_vals": [2, 4, 6, 8, 10]}', encoding="utf-8")
        self.assertEqual(load_interpolator(path).interpolate(2.5), (3.0, 5.0))

    def test_load_rejects_unsorted_table(self) -> None:
        path = self.tmp / "unsorted.json"
        path.write_text('{"x_vals": [1, 3, 2], "y_vals": [0, 0, 0]}', encoding="utf-8")
        with self.assertRaises(InvalidTableError):
            load_interpolator(path)

    def test_load_rejects_non_numeric_table(self) -> None:
        path = self.tmp / "words.json"
        path.write_text('{"x_vals": ["a", 2], "y_vals": [1, 2]}', encoding="utf-8")
        with self.assertRaises(InvalidTableError):
            load_interpolator(path)

    def test_load_rejects_non_object_document(self) -> None:
        path = self.tmp / "number.json"
        path.write_text("42", encoding="utf-8")
        with self.assertRaises(InvalidTableError):
            load_interpolator(path)

    def test_load_rejects_missing_field(self) -> None:
        path = self.tmp / "partial.json"
        path.write_text('{"x_vals": [1, 2]}', encoding="utf-8")
        with self.assertRaises(InvalidTableError):
            load_interpolator(path)

    def test_save_refuses_existing_file(self) -> None:
        path = self.tmp / "table.json"
        save_interpolator(Interpolator(x_vals=[0.0], y_vals=[1.0]), path)
        with self.assertRaises(CreateError):
            save_interpolator(Interpolator(x_vals=[0.0], y_vals=[2.0]), path)


class TestCsvTables(unittest.TestCase):
    def test_vector_table_from_csv(self) -> None:
        interp = interpolator_from_csv(DATA_DIR / "table.csv")
        self.assertEqual(interp.dim, 3)
        x, y = interp.interpolate(2.5)
        self.assertEqual(x, 3.0)
        np.testing.assert_array_equal(y, [5.0, 6.0, 2.5])

    def test_scalar_table_from_csv(self) -> None:
        interp = interpolator_from_csv(DATA_DIR / "table.csv", y_columns=[1])
        self.assertEqual(interp.dim, 1)
        self.assertEqual(interp.interpolate(2.5), (3.0, 5.0))

    def test_x_column_selection(self) -> None:
        interp = interpolator_from_csv(DATA_DIR / "table.csv", x_column=1, y_columns=[0])
        self.assertEqual(interp.interpolate(5.0), (6.0, 2.5))

    def test_bad_columns(self) -> None:
        with self.assertRaises(ParseCsvError):
            interpolator_from_csv(DATA_DIR / "table.csv", x_column=4)
        with self.assertRaises(ParseCsvError):
            interpolator_from_csv(DATA_DIR / "table.csv", y_columns=[7])
        with self.assertRaises(ParseCsvError):
            interpolator_from_csv(DATA_DIR / "table.csv", y_columns=[])

    def test_unsorted_csv_table(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "unsorted.csv"
            path.write_text("x,y\n1,0\n3,1\n2,2\n", encoding="utf-8")
            with self.assertRaises(InvalidTableError):
                interpolator_from_csv(path)


if __name__ == "__main__":
    unittest.main()
