import logging

from .errors import ExtractError, MalformedIntervalLine, InvalidIntervalOrdering, SequenceTooShort
from .interval import MAX_PIECES, Strand, IntervalRequest
from .table import IntervalTable, parse_interval_line, parse_intervals, read_intervals
from .scanner import CHUNK_SIZE, SequenceBuffer, FastaScanner
from .assembly import LINE_WIDTH, Assembler, reverse_complement, format_name, wrap

__version__ = '1.0.0'

logger = logging.getLogger(__name__)

def version():
	return __version__

def extract(table, fasta, out, width=LINE_WIDTH, chunk=CHUNK_SIZE):
	"""Write every interval of table found in the binary FASTA stream fasta
	to the binary stream out, return the number of records written"""
	if not len(table):
		logger.info("no interval requests, fasta input not read")
		return 0

	scanner = FastaScanner(fasta, table, chunk)
	assembler = Assembler(table, out, width)

	for first, name, defline, body in scanner:
		assembler.emit(first, body, defline)

	logger.info("%d of %d sequences matched, %d records written",
		scanner.matched, scanner.records, assembler.written)

	return assembler.written
