import re
import logging

from .interval import NAME_ENCODING, NAME_ERRORS

logger = logging.getLogger(__name__)

#minimal capacity of the sequence buffer
CHUNK_SIZE = 1000000

#scanner states
IDLE = 'idle'
ACCUMULATING = 'accumulating'
DONE = 'done'

HEADER = re.compile(rb'>(\S*)')

class SequenceBuffer:
	"""Growable byte buffer holding the body of one source sequence.

	Capacity doubles when an appended fragment does not fit and is never
	given back, clear() only resets the length so the next sequence reuses
	the same memory.
	"""
	def __init__(self, chunk=CHUNK_SIZE):
		self.chunk = chunk
		self._data = bytearray()
		self._size = 0

	def __len__(self):
		return self._size

	def __repr__(self):
		return "<SequenceBuffer> {} of {} bytes used".format(self._size, self.capacity)

	@property
	def capacity(self):
		return len(self._data)

	def _grow(self, needed):
		capacity = max(len(self._data) * 2, self.chunk)

		while capacity < needed:
			capacity *= 2

		self._data.extend(bytes(capacity - len(self._data)))

	def append(self, fragment):
		end = self._size + len(fragment)

		if end > len(self._data):
			self._grow(end)

		self._data[self._size:end] = fragment
		self._size = end

	def clear(self):
		self._size = 0

	def view(self):
		#read only view, must be released before the buffer grows again
		return memoryview(self._data)[:self._size].toreadonly()

	def tobytes(self):
		return bytes(self._data[:self._size])


class FastaScanner:
	"""Single pass reader over a binary FASTA stream.

	Iterating yields (first_index, name, defline, body) for every source
	sequence that has at least one request in the table, once its last line
	has been read. body is a read only memoryview into the shared buffer and
	is only valid until the next item is requested. Body lines of sequences
	without requests are dropped as they are read.
	"""
	def __init__(self, handle, table, chunk=CHUNK_SIZE):
		self.handle = handle
		self.table = table
		self.buffer = SequenceBuffer(chunk)
		self.state = IDLE
		self.records = 0
		self.matched = 0

	def __repr__(self):
		return "<FastaScanner> {} records read, {} matched".format(self.records, self.matched)

	def _flush(self, first, name, defline):
		self.matched += 1
		body = self.buffer.view()

		try:
			yield first, name, defline, body
		finally:
			body.release()
			self.buffer.clear()

	def __iter__(self):
		first = None
		name = None
		defline = None

		for line in self.handle:
			if line.startswith(b'>'):
				if first is not None:
					yield from self._flush(first, name, defline)

				self.state = ACCUMULATING
				self.records += 1

				defline = line.rstrip(b'\r\n').decode(NAME_ENCODING, NAME_ERRORS)
				name = HEADER.match(line).group(1).decode(NAME_ENCODING, NAME_ERRORS)
				first = self.table.find_first(name)

				if first is None:
					logger.debug("no interval requests for %s, skipped", name)

			elif first is not None:
				fragment = line.rstrip()

				if fragment:
					self.buffer.append(fragment)

		if first is not None:
			yield from self._flush(first, name, defline)

		self.state = DONE
