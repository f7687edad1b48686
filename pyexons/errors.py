class ExtractError(Exception):
	"""Base class for all fatal errors raised while extracting intervals"""


class MalformedIntervalLine(ExtractError, ValueError):
	"""A line of the interval list is missing a field, has an unreadable
	field or has too many fields"""

	def __init__(self, lineno, field, message):
		self.lineno = lineno
		self.field = field
		super().__init__("line {}, {}: {}".format(lineno, field, message))


class InvalidIntervalOrdering(ExtractError, ValueError):
	"""Piece coordinates are not positive, not ascending or the piece
	count is out of range"""

	def __init__(self, lineno, field, message):
		self.lineno = lineno
		self.field = field

		if lineno is None:
			super().__init__("{}: {}".format(field, message))
		else:
			super().__init__("line {}, {}: {}".format(lineno, field, message))


class SequenceTooShort(ExtractError, ValueError):
	"""A requested end position lies beyond the source sequence"""

	def __init__(self, name, end, length):
		self.name = name
		self.end = end
		self.length = length

		if length == 0:
			message = "no sequence for {}".format(name)
		else:
			message = "end position exceeds sequence length ({} > {}) for sequence {}".format(
				end, length, name)

		super().__init__(message)
