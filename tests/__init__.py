"""
Тестовый набор cavity ballast designer

Содержит:
- tests/unit/          : Unit тесты отдельных модулей и каталога дизайнов
"""
