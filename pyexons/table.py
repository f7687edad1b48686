import re
import bisect
import logging
import operator
import collections.abc

from .errors import MalformedIntervalLine, InvalidIntervalOrdering
from .interval import MAX_PIECES, NAME_ENCODING, NAME_ERRORS, Strand, IntervalRequest, check_piece

logger = logging.getLogger(__name__)

INTEGER = re.compile(r'[+-]?\d+')

def atoi(token):
	#leading integer prefix of token, 0 if there is none
	m = INTEGER.match(token.lstrip())

	if m:
		return int(m.group())

	return 0

def parse_number(token, lineno, field, lenient=False):
	if lenient:
		return atoi(token)

	if not INTEGER.fullmatch(token):
		raise MalformedIntervalLine(lineno, field,
			"{!r} is not an integer".format(token))

	return int(token)

def parse_strand(token, lineno, lenient=False):
	if lenient:
		#anything but '+' is read as minus strand
		return Strand.PLUS if token == '+' else Strand.MINUS

	try:
		return Strand.from_symbol(token)
	except ValueError as e:
		raise MalformedIntervalLine(lineno, 'strand', str(e)) from None

def parse_interval_line(line, lineno, max_pieces=MAX_PIECES, lenient=False):
	"""Parse one line of an interval list, either

		<name>
		<name> <n> <start_1> <end_1> ... <start_n> <end_n> <+|-> [<suffix>]

	into an IntervalRequest. Pieces are checked as they are read so the first
	problem on the line is the one reported.
	"""
	tokens = line.split()

	if not tokens:
		raise MalformedIntervalLine(lineno, 'name', "no sequence name")

	name = tokens[0]

	if len(tokens) == 1:
		return IntervalRequest.whole(name, line=lineno)

	np = parse_number(tokens[1], lineno, 'n', lenient)

	if np < 1:
		raise InvalidIntervalOrdering(lineno, 'n',
			"less than one piece specified, this is not allowed")

	if np > max_pieces:
		raise InvalidIntervalOrdering(lineno, 'n',
			"maximum number of pieces exceeded {} > {}".format(np, max_pieces))

	pieces = []
	pos = 2
	for p in range(1, np+1):
		if pos >= len(tokens):
			raise MalformedIntervalLine(lineno, "start_{}".format(p),
				"no interval start for piece {}".format(p))

		start = parse_number(tokens[pos], lineno, "start_{}".format(p), lenient)

		if pos + 1 >= len(tokens):
			raise MalformedIntervalLine(lineno, "end_{}".format(p),
				"no interval end for piece {}".format(p))

		end = parse_number(tokens[pos+1], lineno, "end_{}".format(p), lenient)

		check_piece(start, end, p, pieces[-1] if pieces else None, lineno)
		pieces.append((start, end))
		pos += 2

	if pos >= len(tokens):
		raise MalformedIntervalLine(lineno, 'strand', "no interval strand")

	strand = parse_strand(tokens[pos], lineno, lenient)

	extra = tokens[pos+1:]
	if len(extra) > 1:
		raise MalformedIntervalLine(lineno, 'suffix',
			"too many fields, unexpected {!r}".format(extra[1]))

	suffix = extra[0] if extra else None

	return IntervalRequest.create(name, pieces, strand, suffix,
		max_pieces=max_pieces, line=lineno)


class IntervalTable(collections.abc.Sequence):
	"""Interval requests sorted by name, span start, span end and strand.

	The table is built once and never modified, several requests may share
	the same name.
	"""
	def __init__(self, requests=()):
		self._requests = sorted(requests, key=operator.attrgetter('sort_key'))
		self._names = [r.name for r in self._requests]

	def __len__(self):
		return len(self._requests)

	def __getitem__(self, idx):
		return self._requests[idx]

	def __repr__(self):
		return "<IntervalTable> contains {} requests".format(len(self))

	def find_first(self, name):
		"""Return the lowest index of a request for name, None if absent"""
		idx = bisect.bisect_left(self._names, name)

		if idx < len(self._names) and self._names[idx] == name:
			return idx

		return None

	def matches(self, name, first=None):
		if first is None:
			first = self.find_first(name)

			if first is None:
				return

		for idx in range(first, len(self._names)):
			if self._names[idx] != name:
				break

			yield self._requests[idx]


def parse_intervals(lines, max_pieces=MAX_PIECES, lenient=False):
	requests = [parse_interval_line(line, lineno, max_pieces, lenient)
		for lineno, line in enumerate(lines, 1)]

	return IntervalTable(requests)

def read_intervals(filename, max_pieces=MAX_PIECES, lenient=False):
	with open(filename, encoding=NAME_ENCODING, errors=NAME_ERRORS) as fh:
		table = parse_intervals(fh, max_pieces, lenient)

	logger.info("read %d interval requests from %s", len(table), filename)

	return table
