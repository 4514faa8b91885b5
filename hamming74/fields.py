from functools import wraps

NIBBLE_BITS = 4
SYNDROME_BITS = 3
WORD_BITS = 7
BYTE_BITS = 8


def check_width(value, max_bits, what='Value'):
    """
    Controlla che value sia un intero non negativo rappresentabile in
    max_bits bit.

    :param value: Il valore da controllare.
    :param max_bits: La lunghezza massima in bit.
    :param what: Il nome del valore, usato nei messaggi di errore.
    :return: Il valore stesso, se valido.
    :raises TypeError: se il valore non è un intero.
    :raises ValueError: se il valore è negativo o più lungo di max_bits bit.
    """

    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{what} must be int")

    if value < 0 or value.bit_length() > max_bits:
        raise ValueError(f"{what} {value} does not fit in {max_bits} bits")

    return value


def fixed_width(max_bits, what):
    """
    Decoratore per funzioni di un solo argomento intero: causa TypeError o
    ValueError se l'argomento non rientra nel numero di bit stabilito.
    """

    def decorator(fn):

        @wraps(fn)
        def wrapper(value):
            return fn(check_width(value, max_bits, what))

        return wrapper

    return decorator
