"""
Ядро: доменные модели, математические примитивы и контракты.

Пакет содержит строительные блоки, от которых зависят все солверы:
численные защиты и интегрирование, модели тела/полости/решения и JSON
Schema контракты. От слоёв mass и solvers не зависит.
"""
