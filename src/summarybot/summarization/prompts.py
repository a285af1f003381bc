"""Prompt templates for question answering and channel summaries.

User content is embedded as-is. Nothing is escaped, so a question or a log
line can steer the model; the replies only go back to the same channel.
"""

from __future__ import annotations

from .history import Period

PERSONA: str = "あなたはIT活用塾のAI塾長です。"


def build_question_prompt(question: str) -> str:
    """
    Build the prompt for a question asked in the question channel.

    Args:
        question: Raw message content, mentions included

    Returns:
        Formatted prompt for LLM
    """
    prompt = f"""{PERSONA}Discord上の質問チャンネル上で、以下のことを考慮して質問に回答せよ。
## 制約条件
- 塾生からの質問に対してわかりやすい答えを提供すること
- 調べたほうがいいこと(Webの検索ワード等も添える)、次に取るべきアクションの提案
- 倫理的に反することには回答しない
- 結果はDiscordのマークダウン形式でわかりやすく提供せよ

## 質問内容
{question}"""

    return prompt


def build_summary_prompt(log: str, period: "Period | str") -> str:
    """
    Build the prompt that summarizes a member's activity channel.

    Args:
        log: Newline-joined transcript, possibly empty
        period: Period the transcript covers

    Returns:
        Formatted prompt for LLM
    """
    period = Period.parse(period)

    prompt = f"""{PERSONA}Discord上の個別の活動チャンネルに対して、以下のことを考慮して内容をまとめよ。
## 制約条件
- あなたの目的は塾生の活動ログをわかりやすくまとめ、塾生の振り返りの質を高めることです。
- 活動ログの期間は{period.label}
- 塾生の活動に対してあなたの評価を述べてください。
- 調べたほうがいいこと(Webの検索ワード等も添える)、次に取るべきアクションの提案
- 倫理的に反することには回答しない
- 結果はDiscordのマークダウン形式でわかりやすく提供せよ

## 活動ログ
{log}"""

    return prompt
