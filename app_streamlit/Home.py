# --------------------------------------------------------------
# File: Home.py
# Description: Página Streamlit para cifrar un archivo local y verificar el descifrado.
# --------------------------------------------------------------

import streamlit as st

from aesfile.errors import InvalidIvLengthError, StageError
from aesfile.keys import validate_iv
from aesfile.models import KeySize
from aesfile.pipeline import PipelineRunner, scripted_input

# Configura los metadatos de la página principal de la aplicación.
st.set_page_config(page_title="AES File Encrypt", page_icon="🔐", layout="centered")

# Presenta el nombre de la herramienta y su propósito general.
st.title("🔐 AES File Encrypt")
st.write("Cifra un archivo con AES-CBC (128/192/256 bits) y verifica el descifrado.")
st.info("La clave se genera en cada ejecución y no se guarda: anótala si la necesitas.")

# Recoge los mismos parámetros que la versión de consola.
choice = st.selectbox(
    "Tamaño de clave",
    options=["1", "2", "3"],
    format_func=lambda c: f"{KeySize.from_choice(c).bits} bits",
)
iv_phrase = st.text_input("Frase secreta para el IV (16, 24 o 32 caracteres)")
file_path = st.text_input("Ruta del archivo a cifrar")

if st.button("Cifrar y verificar"):
    # El IV se valida aquí: la página no puede repreguntar como la consola.
    try:
        validate_iv(iv_phrase.strip())
    except InvalidIvLengthError as exc:
        st.warning(f"IV inválido: {exc}")
        st.stop()

    messages = []
    runner = PipelineRunner(
        scripted_input([choice, iv_phrase, file_path]),
        notify=messages.append,
    )
    try:
        report = runner.run()
    except StageError as exc:
        st.error(f"Error en la etapa '{exc.stage}': {exc.cause}")
        st.stop()

    # Muestra la telemetría principal de la ejecución.
    st.success(f"Archivo cifrado ({report.variant.value}-CBC).")
    st.write("**Clave (hex):**", report.key_hex)
    st.code("\n".join(report.trace))
    st.write("**Cifrado:**", f"{report.ciphertext.path} ({report.ciphertext.size} bytes)")
    st.write("**Descifrado:**", f"{report.recovered.path} ({report.recovered.size} bytes)")
    st.write(
        "**Verificación del descifrado:**",
        "✅ OK" if report.verified else "❌ FALLA",
    )
    if report.recovered_preview is not None:
        st.markdown("### Contenido descifrado")
        st.code(report.recovered_preview)
