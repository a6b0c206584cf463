"""The light XOR obfuscation applied to passwords before they are sent."""


def xor_string(text: str) -> str:
    """XOR every UTF-16 code unit of ``text`` with its length modulo 255.

    Applying the function twice returns the original text.
    """
    raw = text.encode("utf-16-le", "surrogatepass")
    units = [int.from_bytes(raw[i:i + 2], "little") for i in range(0, len(raw), 2)]
    code = len(units) % 255
    out = b"".join((unit ^ code).to_bytes(2, "little") for unit in units)
    return out.decode("utf-16-le", "surrogatepass")