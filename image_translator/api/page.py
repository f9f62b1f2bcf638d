"""Single-page UI served at /.

The page only drives the JSON API; all state lives in the server session.
"""

INDEX_HTML = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>Image Text Translator</title>
<style>
  body { font-family: sans-serif; max-width: 880px; margin: 2rem auto; padding: 0 1rem; }
  h1 { color: #1976d2; text-align: center; }
  #drop { border: 2px dashed #1976d2; border-radius: 8px; padding: 40px; text-align: center;
          background: #fafafa; cursor: pointer; }
  #drop.active { background: #f0f7ff; }
  #preview { display: block; max-width: 100%; max-height: 200px; margin: 1rem auto; }
  .controls { display: flex; flex-wrap: wrap; gap: .5rem; margin: 1rem 0; align-items: center; }
  .panels { display: flex; flex-wrap: wrap; gap: 1rem; }
  .panel { flex: 1; min-width: 280px; }
  textarea { width: 100%; height: 12rem; background: #f9f9f9; }
  #error { color: #c62828; text-align: center; min-height: 1.2em; }
</style>
</head>
<body>
<h1>Image Text Translator</h1>

<div id="drop">
  <p>Drag &amp; drop an image here, or click to select</p>
  <small>Supports JPEG, PNG, BMP, etc.</small>
  <input id="file" type="file" accept="image/*" capture="environment" hidden>
</div>
<img id="preview" alt="Uploaded preview" hidden>

<p id="error"></p>

<div class="controls">
  <button id="extract" disabled>Extract Text</button>
  <span id="progress"></span>
  <label>Language <select id="language"></select></label>
  <label>API Provider <select id="provider"></select></label>
  <button id="translate" disabled>Translate</button>
  <button id="clear">Clear</button>
</div>

<div class="panels">
  <div class="panel">
    <h2>Extracted Text <button data-copy="extracted">Copy</button></h2>
    <textarea id="extracted" readonly></textarea>
  </div>
  <div class="panel">
    <h2>Translated Text <button data-copy="translated">Copy</button></h2>
    <textarea id="translated" readonly></textarea>
    <small id="translated-by"></small>
  </div>
</div>

<script>
const $ = (id) => document.getElementById(id);

function render(state) {
  $("error").textContent = state.error || "";
  $("extracted").value = state.extracted_text || "";
  $("translated").value = state.translated_text || "";
  $("translated-by").textContent = state.translated_by ? "via " + state.translated_by : "";
  $("extract").disabled = !state.has_image || state.busy;
  $("translate").disabled = !state.extracted_text || state.busy;
  $("progress").textContent = state.busy ? state.progress + "%" : "";
  if (!state.has_image) { $("preview").hidden = true; }

  $("language").innerHTML = state.languages.map((l) =>
    `<option value="${l.code}" ${l.code === state.target_language ? "selected" : ""}>${l.name}</option>`
  ).join("");
  $("provider").innerHTML = state.providers.map((p) =>
    `<option value="${p.id}" ${p.available ? "" : "disabled"} ` +
    `${p.id === state.preferred_provider ? "selected" : ""}>` +
    `${p.name}${p.free ? " (free)" : ""}${p.available ? "" : " (Unavailable)"}</option>`
  ).join("");
}

async function call(method, url, body) {
  const options = { method, credentials: "same-origin" };
  if (body instanceof FormData) { options.body = body; }
  else if (body) {
    options.body = JSON.stringify(body);
    options.headers = { "Content-Type": "application/json" };
  }
  let state;
  try {
    const response = await fetch(url, options);
    state = await response.json();
  } catch (e) {
    failed();
    return;
  }
  render(state);
}

// Unreadable reply: show a banner and resync the controls
async function failed() {
  $("error").textContent = "Something went wrong. Please try again.";
  $("progress").textContent = "";
  try {
    const response = await fetch("/api/state", { credentials: "same-origin" });
    const state = await response.json();
    render(state);
    $("error").textContent = state.error || "Something went wrong. Please try again.";
  } catch (e) {
    $("extract").disabled = false;
    $("translate").disabled = false;
  }
}

let extracting = false;

async function pollProgress() {
  try {
    const response = await fetch("/api/state", { credentials: "same-origin" });
    const state = await response.json();
    if (extracting && state.busy) { $("progress").textContent = state.progress + "%"; }
  } catch (e) {
    // next tick retries
  }
}

async function extract() {
  $("extract").disabled = true;
  $("progress").textContent = "0%";
  extracting = true;
  const timer = setInterval(pollProgress, 300);
  try {
    await call("POST", "/api/extract");
  } finally {
    extracting = false;
    clearInterval(timer);
  }
}

function upload(file) {
  if (!file) { return; }
  if (file.type.startsWith("image/")) {
    $("preview").src = URL.createObjectURL(file);
    $("preview").hidden = false;
  }
  const form = new FormData();
  form.append("image", file);
  call("POST", "/api/image", form);
}

$("drop").onclick = () => $("file").click();
$("file").onchange = (e) => upload(e.target.files[0]);
$("drop").ondragover = (e) => { e.preventDefault(); $("drop").classList.add("active"); };
$("drop").ondragleave = () => $("drop").classList.remove("active");
$("drop").ondrop = (e) => {
  e.preventDefault();
  $("drop").classList.remove("active");
  upload(e.dataTransfer.files[0]);
};

$("extract").onclick = extract;
$("translate").onclick = () => { $("translate").disabled = true; call("POST", "/api/translate"); };
$("clear").onclick = () => { $("file").value = ""; call("POST", "/api/clear"); };
$("language").onchange = (e) => call("POST", "/api/settings", { target_language: e.target.value });
$("provider").onchange = (e) => call("POST", "/api/settings", { preferred_provider: e.target.value });

document.querySelectorAll("[data-copy]").forEach((button) => {
  button.onclick = () => navigator.clipboard.writeText($(button.dataset.copy).value);
});

call("GET", "/api/state");
</script>
</body>
</html>
"""
