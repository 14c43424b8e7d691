"""
Prompt templates for question rewriting and answer generation.

Defines the fixed system instructions and chat prompt templates used by
the query rewriter and the answer generator. Both templates take the
prior conversation through a ``history`` messages placeholder.

Dependencies: langchain_core.prompts
System role: Prompt templates for the RAG pipeline
"""

from langchain_core.prompts import ChatPromptTemplate, MessagesPlaceholder

REPHRASE_QUESTION_SYSTEM_PROMPT = """Given the following conversation and a follow-up question, \
rephrase the follow-up question to be a standalone question.

Rules:
- Replace pronouns and elliptical references with the subject they refer to in the conversation
- Keep the language of the original question
- Return only the rewritten question on a single line, without quotes or explanations"""

REPHRASE_QUESTION_PROMPT = ChatPromptTemplate.from_messages([
    ("system", REPHRASE_QUESTION_SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    ("human", "Rephrase the following question as a standalone question:\n{question}"),
])

ANSWER_SYSTEM_PROMPT = """You are an experienced researcher, expert at interpreting and answering \
questions based on provided sources.

Using the context and chat history provided below, answer the user's question \
to the best of your ability using only the resources provided. If the context \
does not contain the answer, say so instead of guessing. Be verbose!

<context>
{context}
</context>"""

ANSWER_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ANSWER_SYSTEM_PROMPT),
    MessagesPlaceholder("history"),
    (
        "human",
        "Now, answer this question using the previous context and chat history:\n\n{standalone_question}",
    ),
])
