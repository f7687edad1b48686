import io
import os
import shutil
import tempfile
import unittest
import contextlib
from unittest import mock

import pyexons
import pyexonscli

join = os.path.join

class CommandLineTest(unittest.TestCase):
	def setUp(self):
		self.tmp_dir = tempfile.mkdtemp()
		self.interval_file = join(self.tmp_dir, 'intervals.txt')
		self.fasta_file = join(self.tmp_dir, 'genome.fa')
		self.out_file = join(self.tmp_dir, 'out.fa')

		with open(self.fasta_file, 'w') as fw:
			fw.write(">seqA first\nGGGAAAAATT\nTCCCCC\n>seqB\nACGTN\n")

	def tearDown(self):
		shutil.rmtree(self.tmp_dir)

	def write_intervals(self, *lines):
		with open(self.interval_file, 'w') as fw:
			for line in lines:
				fw.write("{}\n".format(line))

	def read_output(self):
		with open(self.out_file) as fh:
			return fh.read()

	def test_out_file(self):
		self.write_intervals("seqB", "seqA 2 4 8 12 16 - cds")

		ret = pyexonscli.main([self.interval_file, self.fasta_file, '-o', self.out_file])

		self.assertEqual(ret, 0)
		self.assertEqual(self.read_output(), (
			">seqA:4_8:12_>16:-:cds\nGGGGGTTTTT\n"
			">seqB:<1_>5:+\nACGTN\n"
		))
		self.assertEqual(sorted(os.listdir(self.tmp_dir)), ['genome.fa', 'intervals.txt', 'out.fa'])

	def test_line_width(self):
		self.write_intervals("seqA")

		ret = pyexonscli.main(['-w', '4', '-o', self.out_file, self.interval_file, self.fasta_file])

		self.assertEqual(ret, 0)
		self.assertEqual(self.read_output(), ">seqA:<1_>16:+\nGGGA\nAAAA\nTTTC\nCCCC\n")

	def test_stdin_stdout(self):
		self.write_intervals("seqA 1 1 3 +")

		with open(self.fasta_file, 'rb') as fh:
			stdin = io.TextIOWrapper(io.BytesIO(fh.read()))

		stdout = io.TextIOWrapper(io.BytesIO())

		with mock.patch('sys.stdin', stdin), mock.patch('sys.stdout', stdout):
			ret = pyexonscli.main([self.interval_file])

		self.assertEqual(ret, 0)
		self.assertEqual(stdout.buffer.getvalue(), b">seqA:<1_3:+\nGGG\n")

	def test_malformed_interval(self):
		self.write_intervals("seqB", "seqC 2 50 40 +")

		with self.assertLogs('pyexons', level='ERROR') as cm:
			ret = pyexonscli.main([self.interval_file, self.fasta_file, '-o', self.out_file])

		self.assertEqual(ret, 1)
		self.assertIn('line 2', cm.output[0])
		self.assertFalse(os.path.exists(self.out_file))

	def test_sequence_too_short(self):
		#seqA is extracted before seqB fails
		self.write_intervals("seqA", "seqB 1 2 6 +")

		with self.assertLogs('pyexons', level='ERROR') as cm:
			ret = pyexonscli.main([self.interval_file, self.fasta_file, '-o', self.out_file])

		self.assertEqual(ret, 1)
		self.assertIn('6 > 5', cm.output[0])
		self.assertEqual(sorted(os.listdir(self.tmp_dir)), ['genome.fa', 'intervals.txt'])

	def test_stdout_nothing_on_failure(self):
		self.write_intervals("seqA", "seqB 1 2 6 +")

		stdout = io.TextIOWrapper(io.BytesIO())

		with mock.patch('sys.stdout', stdout):
			with self.assertLogs('pyexons', level='ERROR') as cm:
				ret = pyexonscli.main([self.interval_file, self.fasta_file])

		self.assertEqual(ret, 1)
		self.assertIn('6 > 5', cm.output[0])
		self.assertEqual(stdout.buffer.getvalue(), b'')

	@unittest.skipUnless(os.name == 'posix', "file modes are posix only")
	def test_out_file_mode(self):
		self.write_intervals("seqB")
		umask = os.umask(0o022)

		try:
			ret = pyexonscli.main([self.interval_file, self.fasta_file, '-o', self.out_file])
		finally:
			os.umask(umask)

		self.assertEqual(ret, 0)
		self.assertEqual(os.stat(self.out_file).st_mode & 0o777, 0o644)

	def test_lenient(self):
		self.write_intervals("seqA 1 1x 3 x")

		with self.assertLogs('pyexons', level='ERROR'):
			ret = pyexonscli.main([self.interval_file, self.fasta_file, '-o', self.out_file])
		self.assertEqual(ret, 1)

		ret = pyexonscli.main(['--lenient', self.interval_file, self.fasta_file, '-o', self.out_file])
		self.assertEqual(ret, 0)
		self.assertEqual(self.read_output(), ">seqA:<1_3:-\nCCC\n")

	def test_max_pieces(self):
		self.write_intervals("seqA 3 1 2 4 5 7 8 +")

		with self.assertLogs('pyexons', level='ERROR'):
			ret = pyexonscli.main(['-m', '2', self.interval_file, self.fasta_file, '-o', self.out_file])
		self.assertEqual(ret, 1)

	def test_missing_file(self):
		self.write_intervals("seqA")

		with self.assertLogs('pyexons', level='ERROR'):
			ret = pyexonscli.main([self.interval_file, join(self.tmp_dir, 'missing.fa')])
		self.assertEqual(ret, 1)

		with self.assertLogs('pyexons', level='ERROR'):
			ret = pyexonscli.main([join(self.tmp_dir, 'missing.txt'), self.fasta_file])
		self.assertEqual(ret, 1)

	def test_version(self):
		stdout = io.StringIO()

		with contextlib.redirect_stdout(stdout):
			with self.assertRaises(SystemExit):
				pyexonscli.main(['-v'])

		self.assertIn(pyexons.version(), stdout.getvalue())


if __name__ == '__main__':
	unittest.main()
