"""
Quest subsystem.

Components:
- quest_models.py: data structures (Quest, QuestKind) and the passive-kind classifier
- quest_priority.py: pluggable ordering of candidate quests
- passive_controller.py: the claim -> select -> skip loop
- ticker.py: asyncio-backed fixed-period scheduling
"""
