import os, logging
import streamlit as st
from sensei.core import analyze
from sensei.diagram import render_in_streamlit
from sensei.errors import SenseiError
from sensei.ingest import UPLOAD_TYPES, read_upload
from sensei.session import SessionState

logging.basicConfig(
    level=os.getenv("SENSEI_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

st.set_page_config(page_title="ResearchSensei – Paper to Learning Module", layout="wide")
st.title("🎓 ResearchSensei")
st.caption("Upload a paper or image, or paste text, and get a full learning module.")

if "sensei" not in st.session_state:
    st.session_state["sensei"] = SessionState()
state: SessionState = st.session_state["sensei"]

with st.sidebar:
    st.header("Input")
    up = st.file_uploader("Upload a PDF or image", type=UPLOAD_TYPES)
    text = st.text_area("...or paste text / extra context", height=200)
    go = st.button("Analyze", disabled=state.busy, type="primary")
    if st.button("New analysis"):
        state.reset()

if go:
    try:
        file_data = read_upload(up) if up is not None else None
    except SenseiError as e:
        st.error(f"{e} Please try another file.")
    else:
        with st.spinner("Analyzing with Gemini..."):
            state.run(analyze, file_data, text)

if state.error is not None:
    st.error(f"{state.error} Please try again.")

pkg = state.result
if pkg is None:
    st.info("Upload a file or paste text, then Analyze.")
    st.stop()

summary, diagrams, code, video, cards, quiz, insights = st.tabs(
    ["Summary", "Diagrams", "Code", "Script", "Flashcards", "Quiz", "Insights"]
)

with summary:
    st.subheader("📘 Expert Summary")
    st.write(pkg.expert_summary)
    st.subheader("💡 Beginner Explanation")
    st.write(pkg.simple_explanation)
    st.subheader("Key Contributions")
    st.markdown("\n".join(f"- {c}" for c in pkg.key_contributions))

with diagrams:
    st.subheader("Methodology Flowchart")
    render_in_streamlit(pkg.methodology_flowchart)
    st.subheader("Additional Architecture Notes")
    st.write(pkg.visual_diagram_description)

with code:
    st.subheader("Implementation")
    st.code(pkg.python_code, language="python")

with video:
    st.subheader("🎬 Video Storyboard & Script")
    for i, scene in enumerate(pkg.video_script, 1):
        left, right = st.columns([1, 2])
        with left:
            st.caption(f"VISUAL SCENE {i}")
            st.markdown(f"*{scene.visual}*")
        with right:
            st.caption("NARRATION")
            st.write(f'"{scene.scene}: {scene.narration}"')
        st.divider()

with cards:
    cols = st.columns(2)
    for i, card in enumerate(pkg.flashcards):
        with cols[i % 2]:
            flipped = st.toggle("Flip", key=f"card_{i}")
            st.info(card.back if flipped else f"**{card.front}**")

with quiz:
    st.subheader("📝 Knowledge Check")
    for qi, q in enumerate(pkg.quiz):
        choice = st.radio(
            f"{qi + 1}. {q.question}",
            range(len(q.options)),
            format_func=lambda o, q=q: q.options[o],
            index=state.quiz_answers.get(qi),
            key=f"quiz_{qi}",
            disabled=state.quiz_submitted,
        )
        if choice is not None:
            state.choose(qi, choice)
        if state.quiz_submitted:
            if state.quiz_answers.get(qi) == q.correct_answer_index:
                st.success("Correct")
            else:
                st.error(f"Answer: {q.options[q.correct_answer_index]}")
    if state.quiz_submitted:
        st.metric("Score", f"{state.score()} / {len(pkg.quiz)}")
    elif st.button("Submit Answers", disabled=not state.all_answered()):
        state.submit_quiz()
        st.rerun()

with insights:
    st.subheader("✨ Future Scope & Limitations")
    st.write(pkg.additional_insights)
