"""Tests for the sort command."""
import tempfile
import unittest
from pathlib import Path

from hdcompare import LogFile, OutputFileExists, __version__
from hdcompare.commands.sort import do_sort

from ..test_utils import HASHDEEP_HEADER, write_log


class DoSortTest(unittest.TestCase):
    """Tests for do_sort."""

    def test_sorts_entries_by_path(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            input_path = write_log(Path(tmpdir) / 'in', ['1,a,a,c.txt', '2,b,b,a.txt', '3,c,c,b.txt'])
            output_path = Path(tmpdir) / 'out'

            warnings = do_sort(input_path, output_path)

            self.assertIsNone(warnings)
            lines = output_path.read_text().splitlines()
            self.assertEqual(HASHDEEP_HEADER[:4], lines[:4])
            self.assertEqual(f"## Modified by hdcompare v{__version__}", lines[4])
            self.assertEqual(['2,b,b,a.txt', '3,c,c,b.txt', '1,a,a,c.txt'], lines[5:])

    def test_sort_is_stable(self):
        """Test that entries with the same path keep their input order."""
        with tempfile.TemporaryDirectory() as tmpdir:
            input_path = write_log(Path(tmpdir) / 'in', ['9,z,z,same.txt', '1,a,a,other.txt', '2,b,b,same.txt'])
            output_path = Path(tmpdir) / 'out'

            do_sort(input_path, output_path)

            entries = [str(record) for record in LogFile.read(output_path).entries]
            self.assertEqual(['1,a,a,other.txt', '9,z,z,same.txt', '2,b,b,same.txt'], entries)

    def test_paths_with_line_break_characters_are_kept_whole(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            input_path = write_log(Path(tmpdir) / 'in', ['4,ee,ff,dir/p\rq.txt', '4,aa,bb,dir/a\x0cb.txt'])
            output_path = Path(tmpdir) / 'out'

            warnings = do_sort(input_path, output_path)

            self.assertIsNone(warnings)
            entries = [str(record) for record in LogFile.read(output_path).entries]
            self.assertEqual(['4,aa,bb,dir/a\x0cb.txt', '4,ee,ff,dir/p\rq.txt'], entries)

    def test_output_is_a_valid_log(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            input_path = write_log(Path(tmpdir) / 'in', ['1,a,a,b.txt', '2,b,b,a.txt'])
            output_path = Path(tmpdir) / 'out'

            do_sort(input_path, output_path)

            self.assertEqual([], LogFile.read(output_path).header_warnings)

    def test_invalid_lines_are_dropped_and_reported(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            input_path = write_log(Path(tmpdir) / 'in', ['1,a,a,b.txt', 'garbage'])
            output_path = Path(tmpdir) / 'out'

            warnings = do_sort(input_path, output_path)

            self.assertEqual(["Warning: 1 invalid lines found:", "  'garbage'"], warnings)
            self.assertNotIn('garbage', output_path.read_text())

    def test_irregular_header_is_left_alone(self):
        """Test that the modified note is not written over an unexpected 5th line."""
        with tempfile.TemporaryDirectory() as tmpdir:
            header = HASHDEEP_HEADER[:4] + ['## custom']
            input_path = write_log(Path(tmpdir) / 'in', ['1,a,a,b.txt'], header=header)
            output_path = Path(tmpdir) / 'out'

            do_sort(input_path, output_path)

            self.assertEqual(header, output_path.read_text().splitlines()[:5])

    def test_missing_header_is_not_invented(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            input_path = write_log(Path(tmpdir) / 'in', ['2,b,b,z.txt', '1,a,a,a.txt'], header=[])
            output_path = Path(tmpdir) / 'out'

            warnings = do_sort(input_path, output_path)

            self.assertEqual(["Warning: header not found"], warnings)
            self.assertEqual('1,a,a,a.txt\n2,b,b,z.txt\n', output_path.read_text())

    def test_refuses_existing_output(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            input_path = write_log(Path(tmpdir) / 'in', ['1,a,a,b.txt'])
            output_path = Path(tmpdir) / 'out'
            output_path.write_text('keep me')

            with self.assertRaises(OutputFileExists):
                do_sort(input_path, output_path)

            self.assertEqual('keep me', output_path.read_text())

    def test_missing_input(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            output_path = Path(tmpdir) / 'out'

            with self.assertRaises(FileNotFoundError):
                do_sort(Path(tmpdir) / 'missing', output_path)

            self.assertFalse(output_path.exists())


if __name__ == '__main__':
    unittest.main()
