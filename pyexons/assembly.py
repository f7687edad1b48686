import logging

from .interval import NAME_ENCODING, NAME_ERRORS, Strand

logger = logging.getLogger(__name__)

#output sequence line width
LINE_WIDTH = 80

def _complement_table():
	table = bytearray(b'N' * 256)

	for a, b in zip(b'ACGTacgt', b'TGCAtgca'):
		table[a] = b

	return bytes(table)

#A<->T and C<->G keeping case, any other character becomes N
COMPLEMENT = _complement_table()

def reverse_complement(seq):
	if isinstance(seq, str):
		return reverse_complement(seq.encode()).decode()

	return bytes(seq).translate(COMPLEMENT)[::-1]

def assemble(pieces, strand, body):
	"""Join the pieces of body, on the minus strand the last piece comes
	first and every piece is reverse complemented"""
	if strand == Strand.PLUS:
		return b''.join(body[start-1:end] for start, end in pieces)

	return b''.join(reverse_complement(body[start-1:end]) for start, end in reversed(pieces))

def format_name(request, pieces, length):
	#'<' marks a piece starting at the first base, '>' one ending at the last
	fields = [request.name]

	for start, end in pieces:
		fields.append("{}{}_{}{}".format(
			'<' if start == 1 else '', start,
			'>' if end == length else '', end
		))

	fields.append(request.strand.symbol)

	if request.suffix is not None:
		fields.append(request.suffix)

	return ">{}".format(':'.join(fields))

def wrap(seq, width=LINE_WIDTH):
	for i in range(0, len(seq), width):
		yield seq[i:i+width] + b'\n'


class Assembler:
	"""Write one FASTA record per interval request of a source sequence"""

	def __init__(self, table, handle, width=LINE_WIDTH):
		if width < 1:
			raise ValueError("line width must be a positive number")

		self.table = table
		self.handle = handle
		self.width = width
		self.written = 0

	def emit(self, first, body, defline=None):
		name = self.table[first].name
		length = len(body)

		#check every request before writing any of them
		resolved = [(request, request.resolve(length))
			for request in self.table.matches(name, first)]

		for request, pieces in resolved:
			self.handle.write("{}\n".format(format_name(request, pieces, length)).encode(NAME_ENCODING, NAME_ERRORS))
			self.handle.writelines(wrap(assemble(pieces, request.strand, body), self.width))

		logger.debug("%d records extracted from %s", len(resolved), defline or name)
		self.written += len(resolved)

		return len(resolved)
