import os
import sys
import logging
import shutil
import pyexons
import argparse
import tempfile

logger = logging.getLogger('pyexons')

#output kept in memory up to this size before spilling to disk
SPOOL_SIZE = 64 * 1024 * 1024

def open_fasta(fasta):
	if fasta is None or fasta == '-':
		return sys.stdin.buffer

	return open(fasta, 'rb')

def write_atomic(out_file, table, fasta, args):
	#output goes to a temporary file first so a failed run leaves nothing behind
	out_dir = os.path.dirname(os.path.abspath(out_file))
	fd, tmp_file = tempfile.mkstemp(dir=out_dir, prefix='.{}.'.format(os.path.basename(out_file)))

	try:
		with os.fdopen(fd, 'wb') as fw:
			count = pyexons.extract(table, fasta, fw, args.line_width, args.chunk_size)

		#mkstemp creates the file as 0600
		umask = os.umask(0)
		os.umask(umask)
		os.chmod(tmp_file, 0o666 & ~umask)

		os.replace(tmp_file, out_file)

	except BaseException:
		if os.path.exists(tmp_file):
			os.remove(tmp_file)
		raise

	return count

def write_stdout(table, fasta, args):
	#nothing reaches stdout unless every interval was extracted
	with tempfile.SpooledTemporaryFile(max_size=SPOOL_SIZE) as fw:
		count = pyexons.extract(table, fasta, fw, args.line_width, args.chunk_size)

		fw.seek(0)
		shutil.copyfileobj(fw, sys.stdout.buffer)

	sys.stdout.buffer.flush()

	return count

def fasta_extract(args):
	table = pyexons.read_intervals(args.interval_list,
		max_pieces = args.max_pieces,
		lenient = args.lenient
	)

	fh = open_fasta(args.fasta)

	try:
		if args.out_file:
			count = write_atomic(args.out_file, table, fh, args)
		else:
			count = write_stdout(table, fh, args)
	finally:
		if fh is not sys.stdin.buffer:
			fh.close()

	logger.info("%d sequences written", count)

	return count

def positive_int(value):
	number = int(value)

	if number < 1:
		raise argparse.ArgumentTypeError("{} is not a positive integer".format(value))

	return number

def main(argv=None):
	parser = argparse.ArgumentParser(
		prog = 'pyexons',
		usage = "pyexons [OPTIONS] interval_list [fasta]",
		description = (
			"Extract subsequences from a fasta file. Each line of the interval list is\n"
			"either a sequence name, to output the whole sequence, or\n\n"
			"  name n start_1 end_1 ... start_n end_n +|- [suffix]\n\n"
			"to join the n pieces (1-based, inclusive, ascending) into one sequence,\n"
			"reverse complemented on the - strand."
		),
		formatter_class = argparse.RawDescriptionHelpFormatter
	)

	parser.add_argument('-v', '--version',
		action = 'version',
		version = "%(prog)s version {}".format(pyexons.version())
	)
	parser.add_argument('-o', '--out-file',
		metavar = 'str',
		help = "output file, default: output to stdout"
	)
	parser.add_argument('-w', '--line-width',
		type = positive_int,
		default = pyexons.LINE_WIDTH,
		metavar = 'int',
		help = "output sequence line width, default: %(default)s"
	)
	parser.add_argument('-m', '--max-pieces',
		type = positive_int,
		default = pyexons.MAX_PIECES,
		metavar = 'int',
		help = "maximum number of pieces in one interval, default: %(default)s"
	)
	parser.add_argument('--chunk-size',
		type = positive_int,
		default = pyexons.CHUNK_SIZE,
		metavar = 'int',
		help = argparse.SUPPRESS
	)
	parser.add_argument('--lenient',
		action = 'store_true',
		help = "read unparsable numbers as 0 and any strand other than + as -"
	)
	parser.add_argument('--verbose',
		action = 'store_true',
		help = "report progress to stderr"
	)
	parser.add_argument('interval_list',
		help = "interval list file, one interval per line"
	)
	parser.add_argument('fasta',
		nargs = '?',
		help = "input fasta file, default: read from stdin"
	)

	args = parser.parse_args(argv)

	logging.basicConfig(
		format = "%(name)s: %(levelname)s: %(message)s",
		level = logging.INFO if args.verbose else logging.WARNING
	)

	try:
		fasta_extract(args)
	except (pyexons.ExtractError, OSError) as e:
		logger.error(e)
		return 1

	return 0

if __name__ == '__main__':
	sys.exit(main())
