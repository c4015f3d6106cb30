"""
Sentiment Analysis - Test Suite

Test modules organized by functionality:
- unit/ - Fast synthetic tests per component (tokenizer, dictionaries,
  scoring, generation, comparison, config, CLI)
- features/ - Golden behavioural scenarios over the built-in dictionaries
"""
