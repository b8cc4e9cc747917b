class InvalidInputError(ValueError):
    """
    Некорректные входные данные: пустые, нечисловые
    или с несовместимыми размерностями
    """
