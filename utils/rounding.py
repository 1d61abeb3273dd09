from decimal import Decimal, ROUND_HALF_UP

Q2 = Decimal("0.01")


def round2(x) -> float:
    """소수 둘째 자리 반올림 (half-up). 7.425 → 7.43"""
    return float(Decimal(str(x)).quantize(Q2, rounding=ROUND_HALF_UP))


def ratio2(numerator, denominator, scale=1) -> float:
    """numerator / denominator * scale 을 2자리로 반올림, 분모가 0 이하이면 0"""
    numerator = Decimal(str(numerator))
    denominator = Decimal(str(denominator))
    if denominator <= 0:
        return 0.0
    return round2(numerator / denominator * Decimal(str(scale)))
