"""
SkillTree - research-backed domain generation for learning content.
"""

__version__ = "1.0.0"
