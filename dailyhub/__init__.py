"""DailyHub - カレンダー・ToDo・家計簿・シークレットノートの個人向けバックエンド"""
