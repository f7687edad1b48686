import enum
import collections

from .errors import InvalidIntervalOrdering, SequenceTooShort

#max number of pieces joined into one output sequence
MAX_PIECES = 150

#sequence names are compared as bytes, undecodable bytes survive as surrogates
NAME_ENCODING = 'utf-8'
NAME_ERRORS = 'surrogateescape'

class Strand(enum.IntEnum):
	PLUS = 1
	MINUS = 2

	@property
	def symbol(self):
		return '+' if self is Strand.PLUS else '-'

	@classmethod
	def from_symbol(cls, token):
		if token == '+':
			return cls.PLUS

		elif token == '-':
			return cls.MINUS

		raise ValueError("strand must be '+' or '-', not {!r}".format(token))


def check_piece(start, end, p, previous=None, line=None):
	"""Check piece number p (1-based) against the piece before it"""
	if start < 1:
		raise InvalidIntervalOrdering(line, "start_{}".format(p),
			"start position < 1 is not allowed ({})".format(start))

	if end < 1:
		raise InvalidIntervalOrdering(line, "end_{}".format(p),
			"end position < 1 is not allowed ({})".format(end))

	if start > end:
		raise InvalidIntervalOrdering(line, "start_{}".format(p),
			"start > end ({} > {})".format(start, end))

	if previous is not None and previous[1] >= start:
		raise InvalidIntervalOrdering(line, "start_{}".format(p),
			"piece {} ({}..{}) does not come after piece {} ({}..{})".format(
				p, start, end, p-1, previous[0], previous[1]))


_IntervalRequest = collections.namedtuple("IntervalRequest",
	["name", "pieces", "strand", "suffix", "whole_sequence", "line"],
	defaults = [None, False, None]
)

class IntervalRequest(_IntervalRequest):
	"""One requested output sequence.

	pieces holds 1-based inclusive (start, end) pairs in ascending order, it
	is empty for the whole-sequence form until resolved against a source
	sequence with resolve().
	"""
	__slots__ = ()

	@classmethod
	def create(cls, name, pieces, strand=Strand.PLUS, suffix=None,
			max_pieces=MAX_PIECES, line=None):
		pieces = tuple((int(s), int(e)) for s, e in pieces)

		if len(pieces) < 1:
			raise InvalidIntervalOrdering(line, 'n',
				"less than one piece specified, this is not allowed")

		if len(pieces) > max_pieces:
			raise InvalidIntervalOrdering(line, 'n',
				"maximum number of pieces exceeded {} > {}".format(len(pieces), max_pieces))

		for p, (start, end) in enumerate(pieces, 1):
			check_piece(start, end, p, pieces[p-2] if p > 1 else None, line)

		return cls(name, pieces, Strand(strand), suffix, False, line)

	@classmethod
	def whole(cls, name, line=None):
		return cls(name, (), Strand.PLUS, None, True, line)

	@property
	def span_start(self):
		if self.whole_sequence:
			return None

		return self.pieces[0][0]

	@property
	def span_end(self):
		if self.whole_sequence:
			return None

		return self.pieces[-1][1]

	@property
	def sort_key(self):
		#whole sequence requests come before explicit ones of the same name
		return (self.name, self.span_start or 0, self.span_end or 0, int(self.strand))

	def resolve(self, length):
		"""Return the pieces to extract from a source sequence of the
		given length, raise SequenceTooShort if they do not fit"""
		if length == 0:
			raise SequenceTooShort(self.name, self.span_end or 1, length)

		if self.whole_sequence:
			return ((1, length),)

		if self.span_end > length:
			raise SequenceTooShort(self.name, self.span_end, length)

		return self.pieces
